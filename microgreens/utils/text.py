import unicodedata


def collate_key(text: str) -> tuple[str, str]:
    """
    Clave de comparación sin mayúsculas ni acentos ("Rábano" == "rabano"),
    con la forma original como desempate.
    """
    plain = "".join(
        ch for ch in unicodedata.normalize("NFKD", text) if not unicodedata.combining(ch)
    )
    return plain.casefold(), text.casefold()
