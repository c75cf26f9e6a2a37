from typing import Optional, Union

from gitx.bisect import BisectSession
from gitx.commands.base import Command
from gitx.exceptions import ValidationError
from gitx.models.results import BisectReset, BisectStatus, BisectStep

BISECT_ACTIONS = ("start", "good", "bad", "skip", "reset", "status")


class BisectCommand(Command):
    name = "bisect"
    description = "Binary search for the commit that introduced a bug"

    def __init__(
        self,
        session: BisectSession,
        action: str,
        good: Optional[str] = None,
        bad: Optional[str] = None,
    ):
        if action not in BISECT_ACTIONS:
            raise ValidationError(f"Unknown bisect action '{action}'", rule="bisect-action")
        if action == "start" and (good is None or bad is None):
            raise ValidationError("bisect start needs a good and a bad commit", rule="bisect-start")
        self.session = session
        self.action = action
        self.good = good
        self.bad = bad

    def execute(self) -> Union[BisectStep, BisectStatus, BisectReset]:
        if self.action == "start":
            return self.session.start(self.good, self.bad)
        return getattr(self.session, self.action)()
