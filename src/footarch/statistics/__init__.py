"""Batch statistics"""
