from .enroll_server import EnrollServerEntry, EnrollServerFlag

__all__ = ["EnrollServerEntry", "EnrollServerFlag"]
