"""Fest Analytics - registration analytics and CSV reports for college fest admins"""
