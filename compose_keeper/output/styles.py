from rich.style import Style as RichStyle


class Style:
    info = RichStyle(color='cyan')
    good = RichStyle(color='green')
    bad = RichStyle(color='red')
    suspicious = RichStyle(color='yellow')
    warning = RichStyle(color='yellow', bold=True)
    regular = RichStyle()
    context = RichStyle(color='bright_black')
    mark = RichStyle(color='magenta', bold=True)
