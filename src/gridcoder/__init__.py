"""Grid-world coding sandbox: a hero, a level, and a learner's script."""
