"""
Color War core Python package.

Pure game logic for the chain-reaction territory game, kept free of any
rendering or web concerns so it can be driven from the CLI, the Flask app
or tests alike.
Modules:
- board.py: Board, Cell, Coord
- config.py: GameConfig, ConfigError, environment overrides
- cascade.py: explosion propagation (Explosion, propagate)
- deal.py: seeded turn order
- state.py: GameState, new_game
- players.py: player names, colors and messages
- animation.py: presentation-only decorations derived from a cascade
- cli.py: hot-seat command-line game
"""
