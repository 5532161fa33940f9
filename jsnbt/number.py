"""
Reads unquoted SNBT literals as numbers.

The suffix of a literal decides its type: 1b is a TAG_Byte, 1s a TAG_Short, 1 a TAG_Int, 1l a TAG_Long, 1f a TAG_Float, and 1d or 1.0 a TAG_Double.
The literals true and false are read as TAG_Byte( 1 ) and TAG_Byte( 0 ).
"""
import re

from jsnbt.shared import OutOfBoundsError
from jsnbt.tag import TAG_Byte, TAG_Short, TAG_Int, TAG_Long, TAG_Float, TAG_Double

_MAX_INT_DIGITS = len( str( 2**31 ) )

#Patterns are tried in this order; the first full match wins.
#The order matters: e.g. every bare integer would also match a looser double pattern.
_FLOAT_RE         = re.compile( r"[-+]?(?:[0-9]+\.?|[0-9]*\.[0-9]+)(?:e[-+]?[0-9]+)?f", re.IGNORECASE )
_BYTE_RE          = re.compile( r"[-+]?(?:0|[1-9][0-9]*)b",                             re.IGNORECASE )
_LONG_RE          = re.compile( r"[-+]?(?:0|[1-9][0-9]*)l",                             re.IGNORECASE )
_SHORT_RE         = re.compile( r"[-+]?(?:0|[1-9][0-9]*)s",                             re.IGNORECASE )
_INT_RE           = re.compile( r"[-+]?(?:0|[1-9][0-9]*)"                                             )
_DOUBLE_RE        = re.compile( r"[-+]?(?:[0-9]+\.?|[0-9]*\.[0-9]+)(?:e[-+]?[0-9]+)?d", re.IGNORECASE )
_DOUBLE_NOSUF_RE  = re.compile( r"[-+]?(?:[0-9]+\.|[0-9]*\.[0-9]+)(?:e[-+]?[0-9]+)?",   re.IGNORECASE )

#( pattern, tag class, length of the suffix to strip )
_PATTERNS = (
    ( _FLOAT_RE,        TAG_Float,  1 ),
    ( _BYTE_RE,         TAG_Byte,   1 ),
    ( _LONG_RE,         TAG_Long,   1 ),
    ( _SHORT_RE,        TAG_Short,  1 ),
    ( _INT_RE,          TAG_Int,    0 ),
    ( _DOUBLE_RE,       TAG_Double, 1 ),
    ( _DOUBLE_NOSUF_RE, TAG_Double, 0 )
)

def classifyNumber( text ):
    """
    Returns ( tagclass, literal ) for the number text would be read as, or None if it isn't a number.
    literal is text without its suffix. Nothing is constructed, so this never raises.

    >>> classifyNumber( "-12s" )
    (<class 'jsnbt.tag.TAG_Short'>, '-12')
    >>> classifyNumber( "true" )
    (<class 'jsnbt.tag.TAG_Byte'>, 'true')
    """
    for pattern, tagclass, suffixLength in _PATTERNS:
        if pattern.fullmatch( text ) is not None:
            return tagclass, text[ :len( text ) - suffixLength ]

    lower = text.lower()
    if lower == "true" or lower == "false":
        return TAG_Byte, lower
    return None

def parseNumber( text ):
    """
    Reads text as a number tag.

    Returns the tag, or None if text isn't a number (in which case it should be read as a TAG_String).
    Constructing the tag can fail even though text looks like a number; e.g. "300b" raises OutOfBoundsError.
    Those exceptions are left to the caller.
    """
    match = classifyNumber( text )
    if match is None:
        return None

    tagclass, literal = match
    if literal == "true":
        return TAG_Byte( 1 )
    elif literal == "false":
        return TAG_Byte( 0 )
    elif tagclass.isReal:
        return tagclass( float( literal ) )
    elif tagclass is TAG_Long:
        #TAG_Long validates the literal as text.
        return TAG_Long( literal )

    #No byte, short or int has more than 10 digits. Longer literals are rejected as text.
    if len( literal.lstrip( "+-" ) ) > _MAX_INT_DIGITS:
        raise OutOfBoundsError( literal, tagclass.min, tagclass.max, tagclass.tagType )
    return tagclass( int( literal ) )
