from functools import wraps
from typing import Any, Callable, Dict, List, Type

from gatehouse.core.observables.event_bus import EventBus


class ObservableContext:
    """A class decorator that allows listeners to subscribe to changes in the class properties.

    Example::

        from gatehouse.core import ContextListener, ObservableContext

        @ObservableContext(vars={"x": int, "y": int})
        class MyContext:
            def __init__(self):
                self.x = 0
                self.y = 0
                self.z = 0  # Not observable because it's not in the vars list

        my_context = MyContext()
        my_context.add_listener(ContextListener(autolog=["x", "y"]))
        # my_context.add_listener(ContextListener(autolog=["z"]))  # Raises ValueError

        my_context.x = 1
        my_context.y = 2

        # Logs:
        # [MyContext] x changed: 0 → 1
        # [MyContext] y changed: 0 → 2

    Assigning a value equal to the current one emits nothing.
    """

    def __init__(self, vars: str | List[str] | Dict[str, Type]):
        """Initialize the observable context.

        Args:
            vars: A variable name, a list of variable names, or a dictionary of variable names and their types.
        """
        if isinstance(vars, str):
            self.vars = [vars]
        elif isinstance(vars, (list, dict)):
            self.vars = list(vars)
        else:
            raise ValueError(
                f"Invalid vars argument: {vars}, vars must be a str variable name, list of variable names or a "
                "dictionary of variable names and their types."
            )

    def __call__(self, cls):
        cls._observable_vars = self.vars
        for var_name in self.vars:
            private_name = f"_{var_name}"

            def getter(self, name=private_name):
                return getattr(self, name, None)

            def setter(self, value, name=private_name, var=var_name):
                old = getattr(self, name, None)
                setattr(self, name, value)
                if old != value:
                    self._notify_listeners(source=self.__class__.__name__, var=var, old=old, new=value)
                    self._event_bus.emit(
                        "context_updated", source=self.__class__.__name__, var=var, old=old, new=value
                    )
                    self._event_bus.emit(f"{var}_changed", source=self.__class__.__name__, old=old, new=value)

            setattr(cls, var_name, property(getter, setter))

        original_init = cls.__init__

        @wraps(original_init)
        def new_init(self, *args, **kwargs):
            self._listeners = []
            self._listener_subscriptions = {}
            self._event_bus = EventBus()
            original_init(self, *args, **kwargs)

        def add_listener(self, listener: Any):
            """Add a listener to observe context variable changes.

            Args:
                listener: An object with a `context_updated` method and/or methods named `<var>_changed`.

            Raises:
                ValueError: If the listener subscribes to a variable not in the observable context.
            """
            handlers = []
            for attr in dir(listener):
                if attr.endswith("_changed") and callable(getattr(listener, attr)):
                    var = attr[: -len("_changed")]
                    if var not in self.__class__._observable_vars:
                        raise ValueError(f"Listener cannot subscribe to unknown variable '{var}'")
                    handlers.append((f"{var}_changed", getattr(listener, attr)))

            if hasattr(listener, "context_updated"):
                self._listeners.append(listener)
            self._listener_subscriptions[id(listener)] = [
                (event_name, self._event_bus.subscribe(event_name, handler)) for event_name, handler in handlers
            ]

        def remove_listener(self, listener: Any):
            """Remove a previously added listener and all of its `<var>_changed` subscriptions.

            Args:
                listener: The listener object to remove.
            """
            if listener in self._listeners:
                self._listeners.remove(listener)
            for event_name, handler_id in self._listener_subscriptions.pop(id(listener), []):
                self._event_bus.unsubscribe(event_name, handler_id)

        def _notify_listeners(self, source: str, var: str, old: Any, new: Any):
            for listener in list(self._listeners):
                listener.context_updated(source, var, old, new)

        def set_context(self, **updates):
            """Set multiple observable variables at once.

            Args:
                **updates: Key-value pairs of variable names and their new values.
            """
            for key, value in updates.items():
                if key in self.__class__._observable_vars:
                    setattr(self, key, value)

        def subscribe(self, event_name: str, handler: Callable) -> str:
            """Subscribe a handler to a specific event.

            Args:
                event_name: The name of the event to subscribe to, e.g. ``"x_changed"`` or ``"context_updated"``.
                handler: The function to call when the event is emitted.

            Returns:
                The subscription ID.
            """
            return self._event_bus.subscribe(event_name, handler)

        def unsubscribe(self, event_name: str, handler_or_id: str | Callable):
            """Unsubscribe a handler or subscription ID from a specific event."""
            self._event_bus.unsubscribe(event_name, handler_or_id)

        cls.__init__ = new_init
        cls.add_listener = add_listener
        cls.remove_listener = remove_listener
        cls._notify_listeners = _notify_listeners
        cls.set_context = set_context
        cls.subscribe = subscribe
        cls.unsubscribe = unsubscribe
        return cls
