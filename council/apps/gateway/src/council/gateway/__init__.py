"""Council Gateway -- FastAPI HTTP 接口"""
