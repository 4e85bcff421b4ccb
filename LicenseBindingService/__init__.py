"""
License Binding Service Django project.
"""
