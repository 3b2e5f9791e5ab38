"""
Receipt Kernel

Domain core for recurring receipt generation:
- BRL monetary value object with cent precision
- Contract and Receipt snapshots exchanged with the store
- Injectable clock
- Typed exceptions and structured JSON logging
"""

__version__ = "0.1.0"
