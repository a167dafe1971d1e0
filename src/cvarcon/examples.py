"""
Example console for demos and tests.

Builds a small game-like settings surface:
    demo.dummy                      integer that reports its sign on change
    video.width/height/fullscreen   window settings, video.restart command
    video.device / audio.device     same name in two namespaces (ambiguous
                                    when typed bare)
    audio.volume, audio.mute        audio settings, audio.play command

Handlers are not attached, so everything run before attach_handlers() is
queued.
"""
from typing import IO, List, Optional, Tuple

from cvarcon.console import Console
from cvarcon.model import CommandDecl, VariableDecl
from cvarcon.statements import Statement
from cvarcon.values import Value, ValueKind


class DemoHandler:
    """Records what callbacks saw, in order."""

    def __init__(self, name: str):
        self.name = name
        self.events: List[str] = []


def on_dummy(handler: DemoHandler, console: Console, value: Value) -> None:
    if value.data > 0:
        console.write("dummy is positive!\n")
    elif value.data < 0:
        console.write("dummy is negative!\n")
    else:
        console.write("dummy is zero!\n")
    handler.events.append(f"dummy={value.display()}")


def on_video_change(handler: DemoHandler, console: Console, value: Value) -> None:
    handler.events.append(f"video={value.display()}")


def cmd_restart(handler: DemoHandler, console: Console, stat: Statement) -> bool:
    if stat.argc != 1:
        return False
    width = console.get_int("video.width")
    height = console.get_int("video.height")
    handler.events.append(f"restart {width}x{height}")
    console.write(f"Restarting video at {width}x{height}\n")
    return True


def cmd_play(handler: DemoHandler, console: Console, stat: Statement) -> bool:
    if stat.argc < 2:
        return False
    handler.events.append("play " + " ".join(stat.args))
    return True


def build_example_console(output: Optional[IO[str]] = None) -> Console:
    console = Console(app_name="cvarcon_demo", output=output)

    console.create_namespace(
        "demo",
        variables=[
            VariableDecl("dummy", ValueKind.INT, 0, on_dummy, "Doesn't do anything"),
        ],
    )
    console.create_namespace(
        "video",
        commands=[
            CommandDecl("restart", cmd_restart, "\nReopen the window with the current settings."),
        ],
        variables=[
            VariableDecl("width", ValueKind.INT, 640, on_video_change, "Window width in pixels"),
            VariableDecl("height", ValueKind.INT, 480, on_video_change, "Window height in pixels"),
            VariableDecl("fullscreen", ValueKind.BOOL, False, on_video_change, "Use the whole screen"),
            VariableDecl("device", ValueKind.STRING, "default", description="Display adapter"),
        ],
    )
    console.create_namespace(
        "audio",
        commands=[
            CommandDecl("play", cmd_play, "<sound...>\nPlay one or more sounds."),
        ],
        variables=[
            VariableDecl("volume", ValueKind.INT, 80, description="Master volume, 0-100"),
            VariableDecl("mute", ValueKind.BOOL, False, description="Silence all output"),
            VariableDecl("device", ValueKind.STRING, "default", description="Output device"),
        ],
    )
    return console


def attach_handlers(console: Console) -> Tuple[DemoHandler, DemoHandler, DemoHandler]:
    handlers = tuple(DemoHandler(name) for name in ("demo", "video", "audio"))
    for handler in handlers:
        console.find_namespace(handler.name).set_handler(handler)
    return handlers
