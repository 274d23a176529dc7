"""
Data Models Package

Contains all data models and schemas used throughout the application.
"""

from .game import GameResult, GameSnapshot, LetterCell, LetterResult, empty_board

__all__ = ['GameResult', 'GameSnapshot', 'LetterCell', 'LetterResult', 'empty_board']
