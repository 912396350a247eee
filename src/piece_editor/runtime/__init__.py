"""Process-wide services shared by every layer of the editor."""
