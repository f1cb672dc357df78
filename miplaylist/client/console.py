"""Interactive console front end for the playlist."""

import argparse
import asyncio
import logging
import shlex

from ..config import settings
from . import view as events
from .api import ApiError, PlaylistClient
from .controller import ViewController
from .view import PageView

logger = logging.getLogger(__name__)

HELP = """Commands:
  list                 show the playlist
  add <name> <link>    add a video (quote names with spaces)
  like <id>            like a video
  fav <id>             toggle favorite
  delete <id>          delete a video
  stats                show playlist statistics
  help                 show this help
  quit                 exit"""

class ConsoleView(PageView):
    """Prints notifications and dialog errors as they appear."""

    def __init__(self, output=print, prompt=input):
        super().__init__(confirm=self._ask)
        self.write = output
        self._prompt = prompt

    def _ask(self, message):
        answer = self._prompt(f"{message} [y/N] ")
        return answer.strip().lower() in ("y", "yes")

    def add_toast(self, message, level):
        toast = super().add_toast(message, level)
        self.write(f"[{level}] {message}")
        return toast

    def show_error(self, message):
        super().show_error(message)
        self.write(f"error: {message}")

    def print_rows(self):
        if not self.rows:
            self.write("The playlist is empty.")
            return
        for row in self.rows.values():
            star = "*" if row.favorite else " "
            self.write(f"{star} {row.id}  {row.likes:>4} likes  {row.name}")

async def handle_command(line: str, view: ConsoleView, controller: ViewController) -> bool:
    """Runs one console command. Returns False when the session should end."""
    try:
        parts = shlex.split(line)
    except ValueError as e:
        view.write(f"error: {e}")
        return True
    if not parts:
        return True

    command, args = parts[0].lower(), parts[1:]

    if command in ("quit", "exit"):
        return False
    if command == "help":
        view.write(HELP)
    elif command == "list":
        await controller.refresh()
        view.print_rows()
    elif command == "add" and len(args) == 2:
        view.open_dialog()
        view.dialog.name, view.dialog.link = args
        view.dispatch(events.SUBMIT_VIDEO)
    elif command == "like" and len(args) == 1:
        view.dispatch(events.LIKE, video_id=args[0])
    elif command == "fav" and len(args) == 1:
        view.dispatch(events.FAVORITE, video_id=args[0])
    elif command == "delete" and len(args) == 1:
        row = view.row(args[0])
        view.dispatch(events.DELETE, video_id=args[0], video_name=row.name if row else args[0])
    elif command == "stats":
        try:
            stats = await controller.client.get_stats()
        except ApiError as e:
            view.write(f"error: {e.message or 'could not load stats'}")
        else:
            view.write(f"{stats['totalVideos']} videos, {stats['totalFavoritos']} favorites, {stats['totalLikes']} likes")
    else:
        view.write(f"Unknown command: {line.strip()} (try 'help')")

    await controller.drain()
    return True

async def run_console(base_url: str):
    view = ConsoleView()
    async with PlaylistClient(base_url) as client:
        controller = ViewController(view, client)
        controller.bind()
        try:
            await controller.refresh()
            view.print_rows()
            while True:
                try:
                    line = await asyncio.to_thread(input, "playlist> ")
                except EOFError:
                    break
                if not await handle_command(line, view, controller):
                    break
        finally:
            controller.unbind()

def main():
    parser = argparse.ArgumentParser(description="Mi Playlist Musical console client")
    parser.add_argument("--url", default=settings.API_URL, help="playlist server base URL")
    parser.add_argument("--log-level", default=settings.LOG_LEVEL, help="logging level")
    args = parser.parse_args()

    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    try:
        asyncio.run(run_console(args.url))
    except KeyboardInterrupt:
        pass

if __name__ == "__main__":
    main()
