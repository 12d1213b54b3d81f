from .generated_code import GeneratedCodeRepository

__all__ = ["GeneratedCodeRepository"]
