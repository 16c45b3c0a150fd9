"""Desktop host for SPACE RACE: pygame window, display and name prompt."""
