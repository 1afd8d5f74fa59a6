"""Hotel Desk — hotel front-desk backend and booking calendar."""
