"""Reseller outbound message queue application."""
