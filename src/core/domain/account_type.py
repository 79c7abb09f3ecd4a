"""Account types shared by nodes and users.

Nodes (validators) and users own accounts that are derived by the same
hash/key machinery. The tag decides which part of the network layout holds
the key material; the network's own code for each tag is kept in
`NetworkContext.account_type_codes`.
"""

from __future__ import annotations

from enum import Enum


class AccountType(str, Enum):
    """Logical account-type tags."""

    NODE = "node"
    USER = "user"

    @property
    def default_code(self) -> str:
        """Code used when the network vars file does not define one."""

        return self.value

    @property
    def vars_key(self) -> str:
        """Name of the constant that overrides this tag's code in a vars file."""

        return f"NCTL_ACCOUNT_TYPE_{self.name}"

    def label(self) -> str:
        """Human readable label used in rendered headers."""

        return self.value
