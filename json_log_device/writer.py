"""Line-oriented output sink for serialized log documents."""

import os
import sys
import threading


class LineWriter:
    """Appends one text unit per line to a stream or file.

    *output* may be an open text stream, a file path, ``"stdout"``,
    ``"stderr"`` or another LineWriter. Files opened from a path are owned
    and closed by the writer.
    """

    def __init__(self, output="stdout"):
        self._lock = threading.Lock()
        self._owned = False
        if isinstance(output, LineWriter):
            self._stream = output.stream
        elif output == "stdout":
            self._stream = sys.stdout
        elif output == "stderr":
            self._stream = sys.stderr
        elif isinstance(output, (str, os.PathLike)):
            directory = os.path.dirname(os.fspath(output))
            if directory:
                os.makedirs(directory, exist_ok=True)
            self._stream = open(output, "a", encoding="utf-8")
            self._owned = True
        else:
            self._stream = output

    @property
    def stream(self):
        return self._stream

    def write(self, text: str) -> None:
        with self._lock:
            self._stream.write(text if text.endswith("\n") else text + "\n")

    def flush(self) -> None:
        with self._lock:
            self._stream.flush()

    def close(self) -> None:
        with self._lock:
            if self._owned and not self._stream.closed:
                self._stream.close()
