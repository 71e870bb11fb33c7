"""
Signals sent by the orders app.

``order_placed`` fires after an order and its stock decrements have
committed. Receivers get ``order`` and ``alerts`` (list of LowStockAlert).
It is sent with ``send_robust``: a failing receiver is logged and never
undoes the sale.
"""

from django.dispatch import Signal

order_placed = Signal()
