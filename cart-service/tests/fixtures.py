"""Priced entities used across the tests"""
from decimal import Decimal


class Book:
    """Entity exposing name and price as plain attributes"""

    def __init__(self, id, name="Dune", price=Decimal("10.00")):
        self.id = id
        self.name = name
        self.price = price


class Gadget:
    """Entity exposing name and price through accessor methods"""

    def __init__(self, id, label="Lamp", cost="5.00"):
        self.id = id
        self._label = label
        self._cost = cost
        self.name = "ignored attribute"

    def get_name(self):
        return self._label

    def get_price(self):
        return Decimal(self._cost)


class Nameless:
    def __init__(self, id, price=Decimal("1.00")):
        self.id = id
        self.price = price


class Priceless:
    def __init__(self, id, name="Mystery box"):
        self.id = id
        self.name = name


