from dataclasses import dataclass


@dataclass
class Account:
    id: str
    email: str
    name: str
    password_hash: str
