"""Test mocks for external collaborators"""
