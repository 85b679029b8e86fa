""" Execution context for a single handler or command run. """

from typing import Any, Mapping, Optional

from nusantarascript.host import AbstractEntity, AbstractEventHandle, AbstractTarget


class Context:
    """ what a script run can see

    entity, target and event are whatever the triggering host event supplied,
    any of them may be absent. bindings are named values exposed to {key}
    placeholders and expressions (command arguments, chat message, etc.).
    """

    def __init__(
        self,
        entity:Optional[AbstractEntity]=None,
        target:Optional[AbstractTarget]=None,
        event:Optional[AbstractEventHandle]=None,
        bindings:Optional[Mapping[str, Any]]=None,
    ) -> None:
        self.entity = entity
        self.target = target
        self.event = event
        self.bindings:dict[str, Any] = dict(bindings) if bindings else {}
        self.cancelled = False

    def cancel(self) -> bool:
        """ marks the event cancelled, returns False if there's no event to cancel """
        self.cancelled = True
        if self.event is None:
            return False
        self.event.set_cancelled(True)
        return True

    def __repr__(self) -> str:
        entity = self.entity.name if self.entity else None
        return f'Context(entity={entity!r}, bindings={self.bindings!r}, cancelled={self.cancelled})'
