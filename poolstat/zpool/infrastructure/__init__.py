"""zpool command execution and logging"""
