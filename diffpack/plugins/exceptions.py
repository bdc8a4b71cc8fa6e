"""Plugin subsystem exceptions."""


class PluginError(Exception):
    """Base class for plugin errors."""


class PluginConfigError(PluginError):
    """Plugin config file is malformed."""


class PluginLoadError(PluginError):
    """A plugin entrypoint could not be imported or built."""
