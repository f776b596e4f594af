import os

REQUIRED_KEYS = ('ENGINE', 'NAME')


def get_db_connection_params(base_dir=None):
    """
    Get database connection parameters from the environment.
    Returns a dictionary with connection parameters for Django.

    Falls back to a local SQLite file when DB_ENGINE is not set, which is
    what development machines and the test settings use.
    """
    engine = os.getenv('DB_ENGINE')
    if not engine:
        name = os.getenv('DB_NAME') or 'db.sqlite3'
        if base_dir is not None:
            name = str(base_dir / name)
        return {
            'ENGINE': 'django.db.backends.sqlite3',
            'NAME': name,
        }

    params = {
        'ENGINE': engine,
        'NAME': os.getenv('DB_NAME'),
        'USER': os.getenv('DB_USER'),
        'PASSWORD': os.getenv('DB_PASSWORD'),
        'HOST': os.getenv('DB_HOST'),
        'PORT': os.getenv('DB_PORT'),
    }
    if engine.endswith('postgresql'):
        params['OPTIONS'] = {
            'sslmode': os.getenv('DB_SSLMODE', 'require'),
            'client_encoding': 'UTF8'
        }
    return params


def missing_connection_params(params):
    """Names of required connection keys that are empty (e.g. DB_NAME unset)."""
    return [key for key in REQUIRED_KEYS if not params.get(key)]
