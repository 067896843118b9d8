# backend/app/utils/__init__.py
