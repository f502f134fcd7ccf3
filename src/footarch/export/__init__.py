"""Image, dashboard and workbook export"""
