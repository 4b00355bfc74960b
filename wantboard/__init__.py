"""WantBoard: shared MTG card wants lists validated against Scryfall."""
