"""Core logic for ohman: gather documentation, build prompts, stream answers."""

import dataclasses
import logging
import os
import sys
from collections.abc import Sequence
from typing import TextIO

from ohman.errors import (
    ApiKeyMissing,
    InputInterrupted,
    LLMError,
    ManPageNotFound,
    NoFailedCommand,
    OhmanError,
    SessionError,
)
from ohman.input import EXIT_SENTINEL, LineReader
from ohman.llm import ChatClient, LiteLLMClient, Message, Role
from ohman.logs import AnalysisResult, LogType, analyze_file, analyze_text, get_journal_logs
from ohman.man import get_documentation, get_whatis
from ohman.models import EntryType, OhmanConfig, SessionEntry
from ohman.output import Printer
from ohman.prompt import (
    build_chat_messages,
    build_diagnose_messages,
    build_error_messages,
    build_interactive_messages,
    build_log_messages,
    build_question_messages,
)
from ohman.session import SessionStore
from ohman.shell import get_history, get_last_failed
from ohman.wait_indicator import WaitIndicator

log = logging.getLogger(__name__)

EXIT_WORDS = frozenset({EXIT_SENTINEL, "quit", "q"})
HISTORY_CONTEXT_LINES = 5
NO_MAN_PAGE = "(man page not available)"


def parse_command_name(full_command: str) -> str:
    """Return the program name of a shell command line.

    Leading ``VAR=value`` assignments are skipped and paths are reduced to
    their basename, so ``FOO=1 /usr/bin/grep x`` gives ``grep``.
    """
    for part in full_command.split():
        if "=" in part:
            continue
        return part.rsplit("/", 1)[-1]
    return ""


class Assistant:
    """Entry points behind every ohman mode."""

    def __init__(
        self,
        config: OhmanConfig,
        client: ChatClient | None = None,
        sessions: SessionStore | None = None,
        reader: LineReader | None = None,
        printer: Printer | None = None,
        stream: TextIO | None = None,
    ) -> None:
        self._config = config
        self._llm = client
        self._sessions = sessions
        self._reader = reader
        self._stream = stream if stream is not None else sys.stdout
        self._printer = printer if printer is not None else Printer(
            color=config.output.color, stream=self._stream
        )

    def _client(self) -> ChatClient:
        if self._llm is not None:
            return self._llm
        llm_cfg = self._config.llm
        if not llm_cfg.api_key and llm_cfg.provider != "ollama":
            raise ApiKeyMissing()
        self._llm = LiteLLMClient(llm_cfg, show_prompt=self._config.debug.show_prompt)
        return self._llm

    def _line_reader(self) -> LineReader:
        if self._reader is None:
            self._reader = LineReader()
        return self._reader

    def _record(self, entry: SessionEntry) -> None:
        try:
            if self._sessions is None:
                self._sessions = SessionStore()
            self._sessions.add(entry)
        except SessionError as e:
            log.warning("could not record session entry: %s", e)

    @property
    def _language(self) -> str:
        return self._config.output.language

    def _ask_llm(self, messages: Sequence[Message]) -> str:
        """Stream the answer for messages to the output and return it."""
        client = self._client()
        indicator = WaitIndicator("Thinking...")

        def on_chunk(chunk: str) -> None:
            indicator.stop()
            self._stream.write(chunk)
            self._stream.flush()

        indicator.start()
        try:
            response = client.chat_stream(messages, on_chunk)
        finally:
            indicator.stop()
        self._stream.write("\n")
        self._stream.flush()
        return response.content

    def ask(self, command: str, section: int, question: str) -> str:
        """Answer a question about a command using its man page."""
        page = get_documentation(command, section)
        messages = build_question_messages(command, page.content, question, self._language)
        self._printer.plain("🤔 Thinking...")
        self._printer.plain()
        answer = self._ask_llm(messages)
        self._record(
            SessionEntry(command=command, question=question, answer=answer, type=EntryType.QUESTION)
        )
        return answer

    def diagnose_last_failed(self) -> str | None:
        """Diagnose the last failed command recorded by the shell hook."""
        try:
            failed = get_last_failed()
        except NoFailedCommand as e:
            log.debug("no failed command: %s", e)
            self._printer.success("No recent command found to diagnose.")
            self._printer.plain()
            self._printer.plain(
                "💡 Tip: You can use 'ohman <command> [question]' to ask about command usage"
            )
            return None

        self._printer.plain(f"🔍 Analyzing command: {failed.command}")
        self._printer.plain()

        name = parse_command_name(failed.command)
        if not name:
            raise OhmanError("unable to parse command name")

        try:
            doc = get_documentation(name).content
        except ManPageNotFound:
            self._printer.warning(
                f"Unable to get man page for {name}, but will still try to diagnose"
            )
            doc = NO_MAN_PAGE

        recent = get_history(HISTORY_CONTEXT_LINES, self._config.shell.history_file)
        messages = build_diagnose_messages(
            failed.command, failed.exit_code, failed.error, doc, recent, self._language
        )
        self._printer.plain("🔧 Analyzing...")
        self._printer.plain()
        answer = self._ask_llm(messages)
        self._record(
            SessionEntry(command=failed.command, answer=answer, type=EntryType.DIAGNOSE)
        )
        return answer

    def interactive(self, command: str, section: int = 0) -> None:
        """Hold a conversation about a command with its man page loaded."""
        page = get_documentation(command, section)
        self._client()

        self._printer.plain(f"📖 Loaded man page for {command}, entering interactive mode")
        whatis = get_whatis(command)
        if whatis:
            self._printer.plain(f"   {whatis}")
        self._printer.plain("   Type your question, or 'exit' / 'quit' to exit")
        self._printer.plain()

        messages = build_interactive_messages(command, page.content, self._language)
        self._conversation(messages, "❓ ", command, EntryType.INTERACTIVE)

    def chat(self, log_context: str = "") -> None:
        """Free-form chat, optionally about a log report."""
        self._client()
        if log_context:
            self._printer.plain("📋 Log loaded, ask anything about it")
        self._printer.plain("💬 Chat mode. Type 'exit' / 'quit' to exit")
        self._printer.plain()
        messages = build_chat_messages(log_context, self._language)
        self._conversation(messages, "💬 ", "", EntryType.CHAT)

    def _conversation(
        self, messages: list[Message], prompt: str, command: str, entry_type: EntryType
    ) -> None:
        reader = self._line_reader()
        while True:
            try:
                question = reader.read_line(prompt)
            except InputInterrupted:
                break
            if not question:
                continue
            if question in EXIT_WORDS:
                self._printer.plain("👋 Goodbye!")
                break

            messages.append(Message(Role.USER, question))
            self._printer.plain()
            try:
                answer = self._ask_llm(messages)
            except LLMError as e:
                messages.pop()
                self._printer.error(f"Error: {e}")
                continue
            messages.append(Message(Role.ASSISTANT, answer))
            self._record(
                SessionEntry(command=command, question=question, answer=answer, type=entry_type)
            )
            self._printer.plain()

    def show_man_page(self, command: str, section: int = 0) -> str:
        page = get_documentation(command, section)
        self._stream.write(page.content.rstrip("\n") + "\n")
        return page.content

    def analyze_error(self, error_text: str) -> str:
        """Explain a pasted error message or command output."""
        self._printer.plain("🔍 Analyzing error message...")
        self._printer.plain()
        answer = self._ask_llm(build_error_messages(error_text, self._language))
        self._record(SessionEntry(question=error_text, answer=answer, type=EntryType.ERROR))
        return answer

    def analyze_log_file(self, path: str | os.PathLike[str], limit: int = 0) -> str | None:
        result = analyze_file(path, limit)
        return self._analyze_log(result, os.fspath(path))

    def analyze_log_content(self, content: str) -> str | None:
        return self._analyze_log(analyze_text(content), "stdin")

    def analyze_journal(self, unit: str, limit: int = 0) -> str | None:
        content = get_journal_logs(unit, limit)
        result = dataclasses.replace(analyze_text(content), log_type=LogType.SYSTEM)
        return self._analyze_log(result, unit)

    def _analyze_log(self, result: AnalysisResult, source: str) -> str | None:
        if result.total == 0:
            self._printer.warning(f"No log entries found in {source}")
            return None

        counts = ", ".join(f"{level.value}: {n}" for level, n in result.by_level.items())
        self._printer.plain(f"📊 Analyzed {result.total} entries from {source} ({counts})")
        self._printer.plain()
        answer = self._ask_llm(build_log_messages(result.to_text(), self._language))
        self._record(
            SessionEntry(command=source, question="log analysis", answer=answer, type=EntryType.LOG)
        )
        return answer
