from .auth import CustomTokenObtainPairSerializer

__all__ = [
    'CustomTokenObtainPairSerializer',
]
