"""Link Saver: Telegram bot that saves shared links to a linkding instance."""
