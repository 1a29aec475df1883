from rich.console import Console


def make_console(no_color: bool = False) -> Console:
    return Console(no_color=no_color, highlight=False)


CONSOLE = make_console()
