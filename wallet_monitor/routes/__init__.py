"""HTTP routes of the wallet monitor."""
