"""
Blueprints for the HRM System
"""
from .employee import employee_bp
from .api import api_bp

__all__ = ['employee_bp', 'api_bp']
