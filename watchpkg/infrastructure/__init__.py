"""Infrastructure layer for watchpkg"""
