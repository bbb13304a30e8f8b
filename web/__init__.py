"""
web - Flask JSON API для игры.
"""
