import pytest

from miplaylist.client.console import ConsoleView, handle_command
from miplaylist.client.controller import ViewController

def make_console(api, scheduler, answers=()):
    output = []
    answers = list(answers)
    view = ConsoleView(output=output.append, prompt=lambda message: answers.pop(0))
    controller = ViewController(view, api, scheduler=scheduler)
    controller.bind()
    return view, controller, output

@pytest.mark.asyncio
async def test_console_session(live_api, scheduler):
    view, controller, output = make_console(live_api, scheduler, answers=["y"])

    assert await handle_command('add "Never Gonna" https://youtu.be/dQw4w9WgXcQ', view, controller)
    assert "[success] Video added successfully" in output

    scheduler.fire(1.0)
    await controller.drain()
    [video_id] = list(view.rows)

    await handle_command(f"like {video_id}", view, controller)
    assert view.row(video_id).likes == 1

    await handle_command(f"fav {video_id}", view, controller)
    assert "[warning] Added to favorites!" in output

    await handle_command("stats", view, controller)
    assert "1 videos, 1 favorites, 1 likes" in output

    await handle_command(f"delete {video_id}", view, controller)
    assert "[success] Video deleted successfully" in output

    output.clear()
    await handle_command("list", view, controller)
    assert output == ["The playlist is empty."]

@pytest.mark.asyncio
async def test_console_errors_and_quit(live_api, scheduler):
    view, controller, output = make_console(live_api, scheduler, answers=["n"])

    await handle_command("add Song https://vimeo.com/1", view, controller)
    assert "error: Please enter a valid YouTube URL" in output

    await handle_command("delete abc", view, controller)
    assert not any(line.startswith("[") for line in output)

    await handle_command("dance", view, controller)
    assert output[-1] == "Unknown command: dance (try 'help')"

    assert await handle_command("quit", view, controller) is False
