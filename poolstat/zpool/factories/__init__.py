"""Dependency wiring"""
