import os


# ANSI color codes
class Colors:
    GREEN = '\033[92m'
    RED = '\033[91m'
    RESET = '\033[0m'


_WINDOWS_ANSI_HOSTS = ('ANSICON', 'WT_SESSION', 'ConEmuANSI')


def supports_color(stream):
    """Check if `stream` is a terminal that accepts ANSI colors."""
    # https://no-color.org
    if 'NO_COLOR' in os.environ:
        return False

    isatty = getattr(stream, 'isatty', None)
    if isatty is None or not isatty():
        return False

    if os.name == 'nt':
        # Plain cmd.exe consoles only render ANSI behind one of these hosts
        if any(name in os.environ for name in _WINDOWS_ANSI_HOSTS):
            return True
        return os.environ.get('TERM_PROGRAM') == 'vscode'

    return True


def colored(text, color, stream):
    """Wrap `text` in `color` when writing to a color-capable `stream`."""
    if supports_color(stream):
        return f"{color}{text}{Colors.RESET}"
    return text
