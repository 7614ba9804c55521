"""Event sink that renders a stream to the terminal"""

from rich.console import Console
from rich.markup import escape

from streaming import ChunkEvent, ErrorEvent, NormalizedEvent


class ConsoleSink:
    """Prints chunk text as it arrives and errors in red"""

    def __init__(self, console: Console):
        self.console = console
        self.chunks = 0
        self.errors = 0

    @property
    def closed(self) -> bool:
        # rich handles a broken stdout pipe itself by exiting the process
        return False

    async def emit(self, event: NormalizedEvent) -> None:
        if isinstance(event, ChunkEvent):
            self.chunks += 1
            self.console.print(event.text, end="", markup=False, highlight=False, soft_wrap=True)
        elif isinstance(event, ErrorEvent):
            self.errors += 1
            label = "ERROR" if event.fatal else "warning"
            self.console.print(f"\n[red]{label}:[/red] {escape(event.message)}")
        else:
            self.console.print()
            self.console.print(f"[dim]stream ended ({self.chunks} chunks, {self.errors} errors)[/dim]")
