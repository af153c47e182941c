"""
Business Layer CLI - 业务层命令行工具

提供命令：
- start: 实时刷新的组合终端
- performance: 一次性输出历史业绩报告

入口: src.business.cli.main:cli
"""
