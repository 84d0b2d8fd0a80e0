"""Storefront client state and kiosk web layer."""
