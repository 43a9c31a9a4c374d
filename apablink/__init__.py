"""Buffered control of Blinkt! boards and APA102/SK9822 LED chains over GPIO or SPI."""

__version__ = "0.7.1"
__all__ = ["pixel", "output", "blinkt", "demos"]