# flake8: noqa E501

from gettext import gettext as _
from pathlib import Path

COMMAND_DESCRIPTION = _("Place marks on an image and export a count report")


def command(subparser):
    subparser.add_argument(
        "image", type=Path, nargs="?", help=_("PNG or JPEG image to open")
    )
    subparser.add_argument(
        "-o",
        "--output",
        dest="output",
        type=Path,
        help=_("Default path for the exported report"),
    )
    subparser.add_argument(
        "--reduced",
        action="store_true",
        help=_("Export the per-color count instead of the full breakdown"),
    )

    def handle(args):
        from .annotator import handle as annotator_handle

        annotator_handle(args)

    return handle
