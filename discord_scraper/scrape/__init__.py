"""Discord Channel History Scraper.

Downloads the full message history of Discord channels into a local
SQLite database.

Usage:
    python -m discord_scraper.scrape 123456789               # One channel
    python -m discord_scraper.scrape 123,456 789 -d out.db   # Several channels
"""
