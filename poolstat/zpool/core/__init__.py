"""Core domain layer for zpool status parsing"""
