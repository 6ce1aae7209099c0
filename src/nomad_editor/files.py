"""UTF-8 file load/save for buffers."""

from __future__ import annotations

from pathlib import Path

from nomad_editor.runtime import telemetry


class FileDecodeError(OSError):
    """The file exists but is not valid UTF-8."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"{path}: not valid UTF-8 ({reason})")
        self.filename = path


class TextFileStore:
    """Reads and writes whole files as UTF-8 text; errors propagate."""

    encoding = "utf-8"

    def exists(self, path: str) -> bool:
        return Path(path).is_file()

    def read_text(self, path: str) -> str:
        with telemetry.span(
            "files::read", component="files", metadata={"path": path}
        ) as handle:
            # newline="" keeps \r as line content
            with open(path, "r", encoding=self.encoding, newline="") as handle_in:
                try:
                    text = handle_in.read()
                except UnicodeDecodeError as exc:
                    raise FileDecodeError(path, exc.reason) from exc
            handle.add_metadata("chars", len(text))
            return text

    def write_text(self, path: str, content: str) -> None:
        with telemetry.span(
            "files::write",
            component="files",
            metadata={"path": path, "chars": len(content)},
        ):
            with open(path, "w", encoding=self.encoding, newline="") as handle_out:
                handle_out.write(content)


__all__ = ["FileDecodeError", "TextFileStore"]
