"""
Arena module for running tournaments between bots.
"""
from .arena import Arena, BotPlayer, ELORatingSystem, PlayerRecord, expected_score

__all__ = ['Arena', 'BotPlayer', 'ELORatingSystem', 'PlayerRecord', 'expected_score']
