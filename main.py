"""
Word Guessing Game Server - Main Entry Point

Loads the word list, initializes the game service and starts the
Flask-SocketIO application.
"""

from wordle_engine import create_app
from wordle_engine.config import Config
from wordle_engine.services.dictionary_service import Dictionary
from wordle_engine.services.game_service import initialize_game_service
from wordle_engine.services.word_repository import WordRepository
from wordle_engine.utils.game_logger import game_logger
from wordle_engine.utils.normalization import get_locale_rules, make_normalizer


def initialize_services(config_class=Config):
    """
    Build the word repository, dictionary and game service.

    Returns:
        The initialized GameService (its dictionary may be empty)
    """
    rules = get_locale_rules(config_class.LOCALE)

    repository = WordRepository(
        source_url=config_class.WORD_LIST_URL,
        fallback_path=config_class.WORD_LIST_PATH,
        use_local_words=config_class.USE_LOCAL_WORDS,
        rules=rules,
        timeout=config_class.WORD_LIST_TIMEOUT_SECONDS,
    )
    dictionary = Dictionary.from_repository(repository, make_normalizer(rules))

    if dictionary.is_empty:
        game_logger.logger.warning("Word list is empty; new games will be refused until restart")
    else:
        game_logger.logger.info(f"Dictionary loaded with {len(dictionary)} words (locale {rules.name})")

    return initialize_game_service(dictionary, tick_interval=config_class.TICK_INTERVAL_SECONDS)


def main():
    """Main function to initialize services and start the server."""
    game_service = None
    try:
        print("Initializing services...")
        game_service = initialize_services(Config)
        if game_service.dictionary.is_empty:
            print("✗ Word list unavailable")
        else:
            print(f"✓ Game service initialized with {len(game_service.dictionary)} words")

        print("Creating Flask application...")
        app, socketio = create_app(Config)
        print("✓ Flask application created successfully")

        game_logger.logger.info("Game Server Starting")

        print(f"\nStarting Game Server on {Config.HOST}:{Config.PORT}")
        print(f"Debug mode: {Config.DEBUG}")
        print("=" * 50)

        socketio.run(app, host=Config.HOST, port=Config.PORT, debug=Config.DEBUG)

    except KeyboardInterrupt:
        print("\nServer shutting down...")
        game_logger.logger.info("Game Server shutting down (KeyboardInterrupt)")
    except Exception as e:
        print(f"Error starting server: {e}")
        game_logger.logger.error(f"Error starting server: {e}")
        raise
    finally:
        if game_service is not None:
            game_service.shutdown()


if __name__ == '__main__':
    main()
