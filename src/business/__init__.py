"""
Business Layer - 业务模块层

组合业绩终端的业务逻辑层，包含：
- config: 配置管理
- portfolio: 持仓、组合、账户全景、市场概览
- performance: 历史业绩回测
- terminal: 实时刷新终端（调度、视图、界面循环）
- cli: 命令行入口和文本仪表盘
"""
