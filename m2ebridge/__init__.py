"""Message bridge core: messages, filter stages, configuration, queues and a control socket."""

__version__ = "0.1.0"