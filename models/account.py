from dataclasses import dataclass
from typing import Optional

from utils.text_elide import ELIDE_MIDDLE, ELIDE_RIGHT, TextMeasure, elide


@dataclass(frozen=True)
class Account:
    """An attached sync account as announced by the account manager."""

    account_id: str
    display_name: str
    icon_hint: Optional[str] = None

    @property
    def user(self) -> str:
        user, _, _ = self.display_name.rpartition("@")
        return user if user else self.display_name

    @property
    def host(self) -> str:
        user, _, host = self.display_name.rpartition("@")
        return host if user else ""

    def short_display_name(self, width: int, measure: TextMeasure = len) -> str:
        """Two-line toolbar text: the user on top, the server below.

        The user is cut at the right and the host in the middle, each to fit
        ``width``; a non-positive width keeps both untouched. The second line
        is kept even without a host so every account button has the same
        height.
        """

        user = elide(self.user, width, mode=ELIDE_RIGHT, measure=measure)
        host = elide(self.host, width, mode=ELIDE_MIDDLE, measure=measure)
        return f"{user}\n{host}"
