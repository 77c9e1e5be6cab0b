"""
Storefront Django 프로젝트 패키지
"""
