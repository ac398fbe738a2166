"""
Services module for league business logic.

This module organizes services into:
- probability: standings ranking, strength of schedule, win probability, odds
- betting: coin ledger, settlement and per-game locks
- league: games, standings, chat, player stats and users
- live: WebSocket relay, profanity filter, notification diff
- stats: position -> stat field mapping
"""
