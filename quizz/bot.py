"""
Discord binding for the quiz: reads one channel, answers in the same channel.
"""
import asyncio
import logging
from typing import Optional

import discord
from discord.ext import commands

from .config_manager import ConfigManager
from .dispatcher import CommandDispatcher
from .factory import build_session
from .quiz_session import QuizSession
from .sink import OutboundSink

logger = logging.getLogger(__name__)


class DiscordChannelSink(OutboundSink):
    """
    Posts session lines to a Discord channel.

    ``send`` only queues the line; a single writer task posts the queue in
    order, so lines reach the channel in emission order. At most
    ``max_pending`` lines wait for the channel; later lines are dropped, as
    is everything once the channel is known to be unreachable.
    """

    def __init__(self, max_retries: int = 3, max_pending: int = 100):
        self.max_retries = max_retries
        self._queue: "asyncio.Queue[str]" = asyncio.Queue(maxsize=max_pending)
        self._channel: Optional[discord.abc.Messageable] = None
        self._channel_ready = asyncio.Event()
        self._unavailable = False

    def bind(self, channel: discord.abc.Messageable) -> None:
        self._channel = channel
        self._unavailable = False
        self._channel_ready.set()

    def mark_unavailable(self) -> None:
        """Drop queued lines and every later one; the channel cannot be reached."""
        self._unavailable = True
        dropped = 0
        while not self._queue.empty():
            self._queue.get_nowait()
            self._queue.task_done()
            dropped += 1
        logger.warning(
            f"Quiz channel unavailable, dropped {dropped} queued lines",
            extra={'event_type': 'sink_unavailable', 'dropped': dropped}
        )

    def send(self, text: str) -> None:
        if self._unavailable:
            logger.debug(f"Dropping line for unavailable channel: {text!r}")
            return
        try:
            self._queue.put_nowait(text)
        except asyncio.QueueFull:
            logger.warning(
                f"Outbound queue full, dropping line {text!r}",
                extra={'event_type': 'sink_queue_full', 'pending': self._queue.qsize()}
            )

    async def run(self) -> None:
        """Writer loop: wait for the channel, then post queued lines forever."""
        await self._channel_ready.wait()
        while True:
            text = await self._queue.get()
            try:
                await self.send_with_retry(text)
            finally:
                self._queue.task_done()

    async def send_with_retry(self, text: str) -> bool:
        """Send one line, retrying Discord API failures with exponential backoff."""
        for attempt in range(self.max_retries):
            try:
                await self._channel.send(text)
                return True
            except discord.HTTPException as e:
                if attempt == self.max_retries - 1:
                    logger.error(f"All retry attempts failed for message {text!r}: {e}")
                    return False
                wait_time = 2 ** attempt
                logger.warning(f"Discord API error (attempt {attempt + 1}), retrying in {wait_time}s: {e}")
                await asyncio.sleep(wait_time)
        return False


class QuizBot(commands.Bot):
    """Discord bot running the quiz in a single channel."""

    def __init__(self, config_manager: ConfigManager, channel_id: int):
        intents = discord.Intents.none()
        intents.guilds = True
        intents.guild_messages = True
        intents.message_content = True  # Enable this in Discord Developer Portal

        super().__init__(
            command_prefix=config_manager.get_command_prefix(),
            intents=intents,
            help_command=None
        )

        self.config_manager = config_manager
        self.channel_id = channel_id
        self.sink = DiscordChannelSink()
        self.quiz_session: Optional[QuizSession] = None
        self.dispatcher: Optional[CommandDispatcher] = None
        self._writer_task: Optional[asyncio.Task] = None

    async def setup_hook(self):
        """Called when the bot is starting up"""
        logger.info("Setting up quiz session...")
        # ConfigurationError propagates: the bot must not run without its data
        self.quiz_session = build_session(self.config_manager, self.sink)
        self.dispatcher = CommandDispatcher(self.quiz_session, self.config_manager.get_command_prefix())
        self._writer_task = asyncio.create_task(self.sink.run())
        logger.info("Bot setup completed successfully")

    async def on_ready(self):
        """Called when the bot has successfully connected to Discord"""
        logger.info(f"Bot is ready! Logged in as {self.user}")
        channel = self.get_channel(self.channel_id)
        if channel is None:
            try:
                channel = await self.fetch_channel(self.channel_id)
            except discord.HTTPException as e:
                logger.error(f"Cannot access quiz channel {self.channel_id}: {e}")
                self.sink.mark_unavailable()
                return
        self.sink.bind(channel)
        logger.info(f"Quiz running in channel {self.channel_id}")

    async def on_message(self, message: discord.Message):
        if message.author.bot or message.channel.id != self.channel_id:
            return
        if self.dispatcher is None:
            return
        # Keyed by account name; display names change and collide
        await self.dispatcher.dispatch(str(message.author), message.content)

    async def on_error(self, event, *args, **kwargs):
        """Handle general bot errors"""
        logger.error(f"An error occurred in event {event}", exc_info=True)

    async def close(self):
        if self.quiz_session is not None:
            await self.quiz_session.close()
        if self._writer_task is not None:
            self._writer_task.cancel()
        await super().close()


async def run_bot(token: str, config_manager: ConfigManager, channel_id: int):
    """Run the bot until it is stopped"""
    bot = QuizBot(config_manager, channel_id)

    try:
        logger.info("Starting Discord Quiz Bot...")
        await bot.start(token)
    except discord.LoginFailure:
        logger.error("Invalid bot token provided")
        raise
    finally:
        if not bot.is_closed():
            await bot.close()
