"""CLI commands for restcli."""

from restcli.commands.call import CallCommand
from restcli.commands.download import DownloadFileCommand

__all__ = [
    "CallCommand",
    "DownloadFileCommand",
]
