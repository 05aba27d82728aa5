"""Store output layer.

This module owns table connections and the per-task record writer.
It submits translated mutations to the column-family store.
"""
