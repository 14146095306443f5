"""
Backend client, pagination and sitemap generation services
"""
