"""Abstract collaborators the engine depends on."""
