"""Council 命令行"""
