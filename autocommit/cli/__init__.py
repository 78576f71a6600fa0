"""Command-line Interface Package"""
