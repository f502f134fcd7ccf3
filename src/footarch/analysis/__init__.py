"""Region measurement and Arch Index classification"""
