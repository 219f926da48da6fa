"""Display adapters: one view per presentable collection type."""

from vrcli.views.base import ColumnNames, TableDisplayable
from vrcli.views.friends import FriendView
from vrcli.views.users import UserView
from vrcli.views.worlds import WorldView

__all__: list[str] = [
    "ColumnNames",
    "FriendView",
    "TableDisplayable",
    "UserView",
    "WorldView",
]
