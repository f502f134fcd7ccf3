"""Pixel, mask and validation helpers"""
