"""Command line interface for TODOAPP"""
