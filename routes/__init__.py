# Route blueprints for the soundboard web UI
