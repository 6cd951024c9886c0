#!/usr/bin/env python3
"""
QuiZz Discord Bot - Main Entry Point

This script runs the quiz bot in one Discord channel. Configure your bot
token and channel in config.json or set the DISCORD_BOT_TOKEN environment
variable.

Usage:
    python main.py [path/to/config.json]

Environment Variables:
    DISCORD_BOT_TOKEN: Your Discord bot token (overrides config.json)
"""

import asyncio
import json
import logging
import os
import sys
from pathlib import Path

from quizz.config_manager import ConfigManager
from quizz.errors import ConfigurationError

logger = logging.getLogger("quizz")


def load_config(config_path: Path) -> dict:
    """Load configuration from a JSON file."""
    if not config_path.exists():
        print(f"Error: {config_path} not found!")
        print("Please copy config.example.json and configure your Discord bot token.")
        sys.exit(1)

    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        print(f"Error: Invalid JSON in {config_path}: {e}")
        sys.exit(1)
    except OSError as e:
        print(f"Error loading {config_path}: {e}")
        sys.exit(1)


def get_bot_token(config: dict) -> str:
    """Get bot token from environment variable or config."""
    token = os.getenv('DISCORD_BOT_TOKEN') or config.get('bot', {}).get('token')

    if not token or token == "YOUR_BOT_TOKEN_HERE":
        print("Error: Discord bot token not configured!")
        print("Either:")
        print("  1. Set DISCORD_BOT_TOKEN environment variable")
        print("  2. Update the 'token' field in config.json")
        sys.exit(1)

    return token


def get_channel_id(config: dict) -> int:
    channel_id = config.get('bot', {}).get('channel_id')
    if not isinstance(channel_id, int):
        print("Error: 'bot.channel_id' must be the numeric id of the quiz channel")
        sys.exit(1)
    return channel_id


def setup_logging_from_config(config: dict) -> None:
    """Set up logging based on configuration."""
    log_config = config.get('logging', {})
    log_level = getattr(logging, log_config.get('level', 'INFO').upper(), logging.INFO)
    log_directory = Path(log_config.get('log_directory', './logs/'))

    # Create logs directory
    log_directory.mkdir(parents=True, exist_ok=True)

    logging.basicConfig(
        level=log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.StreamHandler(),
            logging.FileHandler(log_directory / "quizz.log", encoding='utf-8')
        ]
    )

    # Reduce discord.py noise
    logging.getLogger('discord').setLevel(logging.WARNING)
    logging.getLogger('discord.http').setLevel(logging.WARNING)


async def run_bot_with_config(config_path: Path) -> None:
    """Run the bot with configuration."""
    config = load_config(config_path)
    setup_logging_from_config(config)

    config_manager = ConfigManager()
    for error in config_manager.apply_config(config):
        logger.warning(f"Ignoring configuration value: {error}")

    token = get_bot_token(config)
    channel_id = get_channel_id(config)

    # Import here so that configuration problems are reported before discord.py loads
    from quizz.bot import run_bot
    await run_bot(token, config_manager, channel_id)


if __name__ == "__main__":
    path = Path(sys.argv[1]) if len(sys.argv) > 1 else Path("config.json")
    try:
        print("Starting QuiZz bot...")
        asyncio.run(run_bot_with_config(path))
    except KeyboardInterrupt:
        print("\nBot stopped by user")
    except ConfigurationError as e:
        print(f"Configuration error: {e}")
        sys.exit(2)
