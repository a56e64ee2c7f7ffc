import os


def _csv(value):
    return [item.strip() for item in value.split(',') if item.strip()]


class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or 'sqlite:///roster.db'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    # Frontend origins allowed for HTTP and Socket.IO
    CORS_ORIGINS = _csv(os.environ.get(
        'CORS_ORIGINS',
        'http://localhost:3000,http://127.0.0.1:3000,http://localhost:5173,http://127.0.0.1:5173',
    ))
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
    # Broadcast player inserts/updates on the /ws namespace
    REALTIME_ENABLED = os.environ.get('REALTIME_ENABLED', '1') not in ('0', 'false', 'False')
    # Number of VS stages created by `flask db-reset`
    VS_DEFAULT_STAGE_COUNT = int(os.environ.get('VS_DEFAULT_STAGE_COUNT', '6'))
