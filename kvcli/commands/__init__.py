from kvcli.commands.put import put  # noqa: F401


__all__ = ["put"]
