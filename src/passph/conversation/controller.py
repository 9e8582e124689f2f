"""Conversation state machine.

The controller keeps no per-user state in memory. What a user is expected
to send next (their pending action) is read from the store on every event,
so any number of events can be handled concurrently:

    Idle --/number--> AwaitingWordCount --valid number--> Idle
    Idle --/sep-----> AwaitingSeparator --valid separator--> Idle
    AwaitingEncryptionPassword --any text--> Idle
    any --cancel button--> Idle

Invalid replies keep the pending action so the user can simply try again.
A user with no pending-action key is Idle.
"""

import logging

from ..errors import (
    InvalidArgument,
    InvalidConfig,
    NotFound,
    NumberOfWordsLessThanZero,
    NumberOfWordsTooBig,
    PassphError,
    SeparatorTooLong,
    TransportFailure,
)
from ..generator import (
    DEFAULT_LENGTH,
    DEFAULT_SEPARATOR,
    PassphraseConfig,
    PassphraseGenerator,
)
from ..logging import JSONLLogger, get_logger
from ..store import PendingAction, UserConfigStore, UserPreferences
from . import messages
from .buttons import SYSTEM_CANCEL, SYSTEM_CANCEL_ACTION, ButtonKind, parse_button_payload
from .keyboards import (
    cancel_action_keyboard,
    generate_keyboard,
    passphrase_options,
    wordlist_chooser,
)
from .replies import PARSE_MODE_HTML, Reply
from .validation import parse_separator, parse_word_count

logger = logging.getLogger(__name__)

GENERATE_TRIGGERS = frozenset({"Generate", "generate", "gen"})


class ConversationController:
    """Turns inbound commands, texts and button clicks into replies."""

    def __init__(
        self,
        store: UserConfigStore,
        generator: PassphraseGenerator,
        json_logger: JSONLLogger | None = None,
    ) -> None:
        self.store = store
        self.generator = generator
        self.registry = generator.registry
        self.json_logger = json_logger or get_logger()

    # Preferences

    async def load_preferences(self, user_id: int) -> UserPreferences:
        """Read a user's settings, defaulting each one that can't be read."""
        wordlist_id = await self.store.get_wordlist(user_id)

        try:
            word_count = await self.store.get_word_count(user_id)
        except NotFound:
            word_count = DEFAULT_LENGTH
        except (InvalidArgument, TransportFailure) as e:
            logger.warning("Can't get number of words of user %s: %s", user_id, e)
            word_count = DEFAULT_LENGTH
        if word_count <= 0:
            logger.error("Number of words of user %s is less than 1", user_id)
            word_count = DEFAULT_LENGTH

        try:
            separator = await self.store.get_separator(user_id)
        except NotFound:
            separator = DEFAULT_SEPARATOR
        except TransportFailure as e:
            logger.warning("Can't get separator of user %s: %s", user_id, e)
            separator = DEFAULT_SEPARATOR

        return UserPreferences(
            user_id=user_id,
            wordlist_id=wordlist_id,
            word_count=word_count,
            separator=separator,
        )

    # Generation

    async def generate(self, user_id: int, *, regenerated: bool = False) -> Reply:
        """Generate a passphrase with the user's current settings.

        A fresh passphrase replaces the message the user typed; a regenerated
        one replaces the previous passphrase.
        """
        prefs = await self.load_preferences(user_id)
        config = PassphraseConfig(
            wordlist=prefs.wordlist_id,
            length=prefs.word_count,
            separator=prefs.separator,
        )

        try:
            passphrase = self.generator.generate(config)
        except InvalidConfig as e:
            logger.error("Can't generate a passphrase for user %s: %s", user_id, e)
            self.json_logger.log_error(str(e), user_id=user_id, context="generate")
            return Reply(text=messages.SERVER_ERROR)

        wordlist = self.registry.resolve(config.wordlist)
        self.json_logger.log_generated(
            user_id=user_id,
            wordlist=wordlist.name,
            length=config.length,
            regenerated=regenerated,
        )

        if regenerated:
            return Reply(
                text=messages.passphrase(passphrase),
                menu=passphrase_options(),
                parse_mode=PARSE_MODE_HTML,
                notice=messages.wordlist_in_use(wordlist),
                edit=True,
            )
        return Reply(
            text=messages.passphrase(passphrase),
            menu=passphrase_options(),
            parse_mode=PARSE_MODE_HTML,
            delete_source=True,
        )

    # Commands

    async def handle_command(self, user_id: int, command: str) -> Reply:
        """Handle a /command (name given without the slash)."""
        command = command.lstrip("/").split("@", 1)[0].lower()

        if command == "start":
            self.json_logger.log_command(command, user_id=user_id)
            return Reply(text=messages.START, menu=generate_keyboard())

        if command == "help":
            self.json_logger.log_command(command, user_id=user_id)
            return Reply(text=messages.HELP, menu=generate_keyboard(), parse_mode=PARSE_MODE_HTML)

        if command == "number":
            self.json_logger.log_command(command, user_id=user_id)
            return await self._ask(user_id, PendingAction.AWAITING_WORD_COUNT, messages.ASK_WORD_COUNT)

        if command == "sep":
            self.json_logger.log_command(command, user_id=user_id)
            return await self._ask(user_id, PendingAction.AWAITING_SEPARATOR, messages.ASK_SEPARATOR)

        if command == "list":
            self.json_logger.log_command(command, user_id=user_id)
            usable = self.registry.list_wordlists(usable_only=True)
            return Reply(
                text=messages.wordlist_overview(usable),
                menu=wordlist_chooser(usable),
                parse_mode=PARSE_MODE_HTML,
            )

        if command in messages.IN_DEVELOPMENT:
            self.json_logger.log_command(command, user_id=user_id)
            return Reply(text=messages.IN_DEVELOPMENT[command], menu=generate_keyboard())

        logger.warning("Got unknown command %r from user %s", command, user_id)
        self.json_logger.log_command(command, user_id=user_id, known=False)
        return Reply(text=messages.UNKNOWN_COMMAND, menu=generate_keyboard())

    async def _ask(self, user_id: int, action: PendingAction, prompt: str) -> Reply:
        """Record what the user should send next and prompt for it."""
        try:
            await self.store.set_pending_action(user_id, action)
        except PassphError as e:
            return self._server_error(user_id, e, context=action.value)
        return Reply(text=prompt, menu=cancel_action_keyboard(), parse_mode=PARSE_MODE_HTML)

    # Free text

    async def handle_text(self, user_id: int, text: str) -> Reply:
        """Handle a plain text message."""
        if text in GENERATE_TRIGGERS:
            return await self.generate(user_id)

        try:
            action = await self.store.get_pending_action(user_id)
        except TransportFailure as e:
            return self._server_error(user_id, e, context="get_pending_action")

        if action is None:
            return Reply(text=messages.UNRECOGNIZED, menu=generate_keyboard())
        if action is PendingAction.AWAITING_WORD_COUNT:
            return await self._set_word_count(user_id, text)
        if action is PendingAction.AWAITING_SEPARATOR:
            return await self._set_separator(user_id, text)

        # Encryption password: not implemented yet, drop back to idle.
        try:
            await self.store.clear_pending_action(user_id)
        except PassphError as e:
            return self._server_error(user_id, e, context=action.value)
        return Reply()

    async def _set_word_count(self, user_id: int, text: str) -> Reply:
        try:
            n = parse_word_count(text)
        except NumberOfWordsLessThanZero as e:
            self.json_logger.log_rejected("word_count", str(e), user_id=user_id)
            return Reply(text=messages.WORD_COUNT_NOT_POSITIVE, menu=cancel_action_keyboard())
        except NumberOfWordsTooBig as e:
            self.json_logger.log_rejected("word_count", str(e), user_id=user_id)
            return Reply(text=messages.WORD_COUNT_TOO_BIG, menu=cancel_action_keyboard())

        try:
            await self.store.set_word_count(user_id, n)
            await self.store.clear_pending_action(user_id)
        except PassphError as e:
            return self._server_error(user_id, e, context="set_word_count", retry=True)

        self.json_logger.log_setting("word_count", user_id=user_id, value=n)
        return Reply(text=messages.WORD_COUNT_CHANGED)

    async def _set_separator(self, user_id: int, text: str) -> Reply:
        try:
            separator = parse_separator(text)
        except SeparatorTooLong as e:
            self.json_logger.log_rejected("separator", str(e), user_id=user_id)
            return Reply(text=messages.SEPARATOR_TOO_LONG, menu=cancel_action_keyboard())

        try:
            await self.store.set_separator(user_id, separator)
            await self.store.clear_pending_action(user_id)
        except PassphError as e:
            return self._server_error(user_id, e, context="set_separator", retry=True)

        self.json_logger.log_setting("separator", user_id=user_id, separator_bytes=len(separator.encode("utf-8")))
        return Reply(text=messages.SEPARATOR_CHANGED)

    # Buttons

    async def handle_button(self, user_id: int, payload: str) -> Reply:
        """Handle a click on an inline button."""
        action = parse_button_payload(payload)
        if action is None:
            logger.warning("Got unknown button payload %r from user %s", payload, user_id)
            return Reply()

        if action.kind is ButtonKind.REGENERATE:
            return await self.generate(user_id, regenerated=True)

        if action.kind is ButtonKind.DELETE:
            return Reply(delete_source=True)

        if action.kind is ButtonKind.SAVE:
            return Reply(notice=messages.SAVE_UNAVAILABLE)

        if action.kind is ButtonKind.SET_WORDLIST:
            return await self._select_wordlist(user_id, action.argument or "")

        if action.argument == SYSTEM_CANCEL:
            return Reply(delete_source=True)

        if action.argument == SYSTEM_CANCEL_ACTION:
            try:
                await self.store.clear_pending_action(user_id)
            except PassphError as e:
                logger.error("Can't remove pending action of user %s: %s", user_id, e)
                self.json_logger.log_error(str(e), user_id=user_id, context="cancel_action")
                return Reply(notice=messages.SERVER_ERROR)
            return Reply(delete_source=True, notice=messages.PENDING_ACTION_REMOVED)

        logger.warning("Got unknown system button %r from user %s", action.argument, user_id)
        return Reply()

    async def _select_wordlist(self, user_id: int, argument: str) -> Reply:
        wordlist = self.registry.get(argument)
        if wordlist is None or not wordlist.usable:
            logger.error("User %s picked unavailable wordlist %r", user_id, argument)
            return Reply(notice=messages.UNKNOWN_WORDLIST)

        try:
            await self.store.set_wordlist(user_id, wordlist.id)
        except InvalidArgument as e:
            logger.error("Can't set wordlist of user %s: %s", user_id, e)
            return Reply(notice=messages.UNKNOWN_WORDLIST)
        except TransportFailure as e:
            logger.error("Can't set wordlist of user %s: %s", user_id, e)
            self.json_logger.log_error(str(e), user_id=user_id, context="set_wordlist")
            return Reply(notice=messages.SERVER_ERROR)

        self.json_logger.log_setting("wordlist", user_id=user_id, wordlist=wordlist.name)
        return Reply(notice=messages.wordlist_selected(wordlist))

    def _server_error(
        self,
        user_id: int,
        error: Exception,
        *,
        context: str,
        retry: bool = False,
    ) -> Reply:
        """Log a failed store call and tell the user something went wrong.

        With retry, the cancel button is offered because the pending action
        is still in place.
        """
        logger.error("Store call %s failed for user %s: %s", context, user_id, error)
        self.json_logger.log_error(str(error), user_id=user_id, context=context)
        menu = cancel_action_keyboard() if retry else None
        return Reply(text=messages.SERVER_ERROR, menu=menu)
