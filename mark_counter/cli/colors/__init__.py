from gettext import gettext as _

COMMAND_DESCRIPTION = _("List the configured color keys and labels")


def command(subparser):
    def handle(args):
        from mark_counter.utils.config import load_config

        cfg = load_config()
        for position, (color, label) in enumerate(cfg.colors, start=1):
            print(f"{position}\t{color}\t{label}")

    return handle
