"""Utility helpers for Frame Notes"""
