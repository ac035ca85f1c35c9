"""输出格式化模块"""
