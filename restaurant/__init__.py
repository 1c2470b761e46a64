"""
Управление позициями заказа в ресторане: статусы позиций и напитков, закрытие заказа
"""

__version__ = "1.0.0"
