"""安全工具

依赖安装: uv add "pwdlib[argon2]"
"""

import secrets

from pwdlib import PasswordHash

# 使用推荐的 Argon2 算法
password_hash = PasswordHash.recommended()

ACTIVATION_TOKEN_LENGTH = 16


def hash_password(password: str) -> str:
    """密码哈希"""
    return password_hash.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """验证密码"""
    return password_hash.verify(plain_password, hashed_password)


def generate_activation_token(length: int = ACTIVATION_TOKEN_LENGTH) -> str:
    """生成激活 token：随机 hex 串截取前 length 位"""
    return secrets.token_hex(length)[:length]
