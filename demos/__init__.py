"""Example models runnable through ``luma-demo``."""

from demos.countdown import CountdownModel
from demos.counter import CounterModel
from demos.shopping import ShoppingListModel

DEMOS = {
    "shopping": ShoppingListModel,
    "counter": CounterModel,
    "countdown": CountdownModel,
}

__all__ = ["CountdownModel", "CounterModel", "ShoppingListModel", "DEMOS"]
