"""Event Admin Gateway -- FastAPI 应用"""
