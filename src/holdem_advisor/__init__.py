"""Texas Hold'em hand evaluation, showdown resolution and regret-matching advice."""

__version__ = "0.1.0"
