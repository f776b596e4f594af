from .auth import CustomTokenObtainPairView

__all__ = [
    'CustomTokenObtainPairView',
]
