# ============================================================================
# FILE: mixtape/core/logging.py
# ============================================================================
import logging
import logging.config


class ActorFilter(logging.Filter):
    """Make sure every record carries an actor, so the format string never fails"""
    def filter(self, record):
        if not hasattr(record, 'actor'):
            record.actor = 'SYSTEM'
        return True


def build_logging_config(level: str = "INFO") -> dict:
    return {
        'version': 1,
        'disable_existing_loggers': False,
        'formatters': {
            'standard': {
                'format': '%(asctime)s - %(name)s - %(levelname)s - %(actor)s - %(message)s'
            },
        },
        'filters': {
            'actor_filter': {
                '()': ActorFilter,
            },
        },
        'handlers': {
            'console': {
                'level': level,
                'class': 'logging.StreamHandler',
                'formatter': 'standard',
                'filters': ['actor_filter']
            },
        },
        'loggers': {
            'mixtape': {
                'handlers': ['console'],
                'level': level,
                'propagate': False,
            },
            'uvicorn.access': {
                'handlers': ['console'],
                'level': 'WARNING',
                'propagate': False,
            },
            '': {
                'handlers': ['console'],
                'level': 'WARNING',
                'propagate': True,
            }
        }
    }


def setup_logging(level: str = "INFO") -> None:
    """Configure application logging (console only, level from settings)"""
    logging.config.dictConfig(build_logging_config(level.upper()))
