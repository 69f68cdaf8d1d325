"""
Models Package

Pydantic models for the cart view and request bodies (cart.py), checkout
and order placement (order.py), and the Florist One wire format (vendor.py).
"""
