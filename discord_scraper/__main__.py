"""Allow `python -m discord_scraper` as a shortcut for the scrape CLI."""

from discord_scraper.scrape.__main__ import main

if __name__ == "__main__":
    main()
