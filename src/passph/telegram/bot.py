"""Telegram bot integration for passph."""

import logging
from typing import Any

from telegram import (
    InlineKeyboardButton,
    InlineKeyboardMarkup,
    KeyboardButton,
    Message,
    ReplyKeyboardMarkup,
    Update,
)
from telegram.error import TelegramError
from telegram.ext import (
    Application,
    CallbackQueryHandler,
    ContextTypes,
    MessageHandler,
    filters,
)

from ..conversation import ConversationController, Menu, Reply

logger = logging.getLogger(__name__)


def to_markup(menu: Menu | None) -> InlineKeyboardMarkup | ReplyKeyboardMarkup | None:
    """Convert a Menu into Telegram reply markup."""
    if menu is None:
        return None

    if menu.inline:
        return InlineKeyboardMarkup(
            [
                [InlineKeyboardButton(b.label, callback_data=b.payload) for b in row]
                for row in menu.rows
            ]
        )

    return ReplyKeyboardMarkup(
        [[KeyboardButton(b.label) for b in row] for row in menu.rows],
        resize_keyboard=True,
    )


def command_name(text: str) -> str:
    """Extract the command from '/cmd@botname args'."""
    first = text.split(maxsplit=1)[0] if text.strip() else ""
    return first.lstrip("/").split("@", 1)[0]


class PassphraseBot:
    """Telegram front end that forwards every event to the controller."""

    def __init__(
        self,
        controller: ConversationController,
        token: str | None = None,
        redis_client: Any = None,
    ) -> None:
        if not token:
            raise ValueError("PASSPHRASEBOT_TOKEN not set")

        self.token = token
        self.controller = controller
        self.redis_client = redis_client
        self.json_logger = controller.json_logger
        self._app: Application | None = None

    def _get_user_id(self, update: Update) -> int:
        """Get the id of the user who caused the update."""
        assert update.effective_user is not None
        return update.effective_user.id

    async def _delete(self, message: Message | None) -> None:
        if message is None:
            return
        try:
            await message.delete()
        except TelegramError as e:
            logger.warning("Can't delete message %s: %s", message.message_id, e)

    async def _send(self, context: ContextTypes.DEFAULT_TYPE, chat_id: int, reply: Reply) -> None:
        if reply.text is None:
            return
        try:
            await context.bot.send_message(
                chat_id=chat_id,
                text=reply.text,
                parse_mode=reply.parse_mode,
                reply_markup=to_markup(reply.menu),
            )
        except TelegramError as e:
            logger.error("Can't send message to user %s: %s", chat_id, e)
            self.json_logger.log_error(str(e), user_id=chat_id, context="send_message")

    async def _deliver_to_chat(
        self,
        update: Update,
        context: ContextTypes.DEFAULT_TYPE,
        reply: Reply,
    ) -> None:
        """Apply a reply to a message event."""
        assert update.effective_chat is not None
        if reply.delete_source:
            await self._delete(update.message)
        await self._send(context, update.effective_chat.id, reply)

    async def _handle_command(
        self, update: Update, context: ContextTypes.DEFAULT_TYPE
    ) -> None:
        """Handle any /command."""
        assert update.message is not None
        assert update.message.text is not None

        reply = await self.controller.handle_command(
            self._get_user_id(update), command_name(update.message.text)
        )
        await self._deliver_to_chat(update, context, reply)

    async def _handle_message(
        self, update: Update, context: ContextTypes.DEFAULT_TYPE
    ) -> None:
        """Handle a plain text message."""
        assert update.message is not None
        assert update.message.text is not None

        reply = await self.controller.handle_text(
            self._get_user_id(update), update.message.text
        )
        await self._deliver_to_chat(update, context, reply)

    async def _handle_button(
        self, update: Update, context: ContextTypes.DEFAULT_TYPE
    ) -> None:
        """Handle a click on an inline button."""
        query = update.callback_query
        assert query is not None

        user_id = self._get_user_id(update)
        reply = await self.controller.handle_button(user_id, query.data or "")

        if reply.edit and reply.text is not None:
            try:
                await query.edit_message_text(
                    text=reply.text,
                    parse_mode=reply.parse_mode,
                    reply_markup=to_markup(reply.menu),
                )
            except TelegramError as e:
                logger.error("Can't edit message for user %s: %s", user_id, e)
                self.json_logger.log_error(str(e), user_id=user_id, context="edit_message")
        else:
            if reply.delete_source:
                try:
                    await query.delete_message()
                except TelegramError as e:
                    logger.warning("Can't delete message for user %s: %s", user_id, e)
            await self._send(context, user_id, reply)

        try:
            await query.answer(text=reply.notice)
        except TelegramError as e:
            logger.warning("Can't answer callback of user %s: %s", user_id, e)

    async def _handle_error(self, update: object, context: ContextTypes.DEFAULT_TYPE) -> None:
        """Log errors raised by handlers."""
        logger.error("Error processing update", exc_info=context.error)
        user_id = None
        if isinstance(update, Update) and update.effective_user is not None:
            user_id = update.effective_user.id
        self.json_logger.log_error(str(context.error), user_id=user_id, context="update")

    async def _post_shutdown(self, application: Application) -> None:
        """Called after Application.shutdown()."""
        if self.redis_client is not None:
            await self.redis_client.aclose()

    def build_app(self) -> Application:
        """Build the Telegram application."""
        self._app = (
            Application.builder()
            .token(self.token)
            .concurrent_updates(True)
            .post_shutdown(self._post_shutdown)
            .build()
        )

        private = filters.ChatType.PRIVATE
        self._app.add_handler(MessageHandler(private & filters.COMMAND, self._handle_command))
        self._app.add_handler(
            MessageHandler(private & filters.TEXT & ~filters.COMMAND, self._handle_message)
        )
        self._app.add_handler(CallbackQueryHandler(self._handle_button))
        self._app.add_error_handler(self._handle_error)

        return self._app

    def run(self) -> None:
        """Run the bot (blocking)."""
        app = self.build_app()

        logger.info("Starting Telegram bot...")
        app.run_polling(allowed_updates=[Update.MESSAGE, Update.CALLBACK_QUERY])
