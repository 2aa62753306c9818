import regex

quote_pairs = {
    '"': '"',
    "'": "'",
    '“': '”',
    '„': '“',
    '«': '»',
    '「': '」',
}

leading_fence_pattern = regex.compile(r'^```[^\n]*\n')
trailing_fence_pattern = regex.compile(r'\n```\s*$')

def StripCodeFences(text : str) -> str:
    """
    Remove a leading code-fence marker line and a trailing code-fence marker line
    """
    text = leading_fence_pattern.sub('', text, count=1)
    text = trailing_fence_pattern.sub('', text, count=1)
    return text

def StripEnclosingQuotes(text : str) -> str:
    """
    Remove a single quote character from each end of the text, only if it is quoted on both ends
    """
    if len(text) >= 2:
        closing = quote_pairs.get(text[0])
        if closing and text[-1] == closing:
            return text[1:-1]
    return text

def CleanTranslation(text : str|None) -> str:
    """
    Normalise formatting artifacts the translation backend tends to add around its response
    """
    if not text:
        return ''

    text = text.strip()
    text = StripCodeFences(text).strip()
    text = StripEnclosingQuotes(text)
    return text.strip()

def Linearise(text : str) -> str:
    """
    Collapse a multi-line string to a single line for logging
    """
    lines = [ line.strip() for line in str(text).split("\n") ]
    return " | ".join(line for line in lines if line)

def Truncate(text : str, max_length : int = 60) -> str:
    text = Linearise(text)
    return text if len(text) <= max_length else text[:max_length - 3] + '...'
