import re
import sys

from struct import Struct

#Tag Types
#These are the same numeric IDs the binary NBT format uses, so tags can be handed to binary NBT tooling as-is.
#A TAG_End never appears in SNBT text. It is the listTagType of a TAG_List that doesn't have an element type yet.
TAG_END        = 0
TAG_BYTE       = 1  #A TAG_Byte stores a 1-byte signed integer. Written with a "b" suffix, e.g. 5b
TAG_SHORT      = 2  #A TAG_Short stores a 2-byte signed integer. Written with an "s" suffix, e.g. 5s
TAG_INT        = 3  #A TAG_Int stores a 4-byte signed integer. Written without a suffix, e.g. 5
TAG_LONG       = 4  #A TAG_Long stores an 8-byte signed integer. Written with an "l" suffix, e.g. 5l
TAG_FLOAT      = 5  #A TAG_Float stores a binary32 float. Written with an "f" suffix, e.g. 5.0f
TAG_DOUBLE     = 6  #A TAG_Double stores a binary64 float. Written with a "d" suffix or with a decimal point, e.g. 5.0d, 5.0
TAG_BYTE_ARRAY = 7  #A TAG_Byte_Array is a list of TAG_Bytes, written [B;1b,2b]
TAG_STRING     = 8  #A TAG_String is written unquoted if it only uses [A-Za-z0-9._+-], otherwise with "" or '' quotes
TAG_LIST       = 9  #A TAG_List stores several tags of the same type, written [a,b,c]
TAG_COMPOUND   = 10 #A TAG_Compound stores several uniquely-named tags of any type, written {name:value,...}
TAG_INT_ARRAY  = 11 #A TAG_Int_Array is a list of TAG_Ints, written [I;1,2]
TAG_LONG_ARRAY = 12 #A TAG_Long_Array is a list of TAG_Longs, written [L;1l,2l]

#Internal names of tags (indexed by tag type) as defined by the NBT specification
TAG_NAMES = (
    "TAG_End",
    "TAG_Byte",
    "TAG_Short",
    "TAG_Int",
    "TAG_Long",
    "TAG_Float",
    "TAG_Double",
    "TAG_Byte_Array",
    "TAG_String",
    "TAG_List",
    "TAG_Compound",
    "TAG_Int_Array",
    "TAG_Long_Array"
)

#Total number of tags supported by this version of the library.
TAG_COUNT = len( TAG_NAMES )

#Position of each tag type when sorting compound entries by type (see writer.compareType), indexed by tag type.
SORT_ORDERS = (
    -1, #TAG_End
    1,  #TAG_Byte
    2,  #TAG_Short
    3,  #TAG_Int
    4,  #TAG_Long
    5,  #TAG_Float
    6,  #TAG_Double
    8,  #TAG_Byte_Array
    0,  #TAG_String
    11, #TAG_List
    7,  #TAG_Compound
    9,  #TAG_Int_Array
    10  #TAG_Long_Array
)

#Inclusive bounds of the integral tags
BYTE_MIN,  BYTE_MAX  =                 -128,                 127
SHORT_MIN, SHORT_MAX =               -32768,               32767
INT_MIN,   INT_MAX   =          -2147483648,          2147483647
LONG_MIN,  LONG_MAX  = -9223372036854775808, 9223372036854775807

#Largest finite binary32 value, decoded from its bit pattern (0x7f7fffff) so it's exact.
FLOAT_MAX  = Struct( ">f" ).unpack( b"\x7f\x7f\xff\xff" )[0]
DOUBLE_MAX = sys.float_info.max

#Values stored in place of a TAG_Float / TAG_Double whose magnitude is too large to represent.
#They're printed as the literals "9e99" and "9e999" rather than as infinities.
#Note that 9e99 fits in a Python float, while 9e999 is read back as an infinity.
FLOAT_CLAMP         = 9e99
DOUBLE_CLAMP        = float( "9e999" )
FLOAT_CLAMP_TEXT    = "9e99"
DOUBLE_CLAMP_TEXT   = "9e999"

#Magnitudes of LONG_MAX and LONG_MIN as digit strings; TAG_Long literals are compared against these digit by digit.
_LONG_MAX_DIGITS = "9223372036854775807"
_LONG_MIN_DIGITS = "9223372036854775808"
_LONG_DIGITS_RE  = re.compile( r"[1-9][0-9]*" )

class SNBTError( Exception ):
    """This exception is raised when parsing, writing, or building data that violates the SNBT format."""
    pass

class WrongTagError( SNBTError ):
    """
    WrongTagError( expected, given )

    This exception is raised when a tag of the wrong type is inserted into a TAG_List or typed array.
    A TAG_List may only contain tags of a single type. That type is fixed by the first tag inserted into the list;
    TAG_Byte_Array, TAG_Int_Array and TAG_Long_Array have their type fixed when they are created.
    """
    @property
    def expected( self ):
        return self.args[0]

    @property
    def given( self ):
        return self.args[1]

    def __str__( self ):
        return "Cannot insert {} into a list of {}.".format( describeTag( self.args[1] ), describeTag( self.args[0] ) )

class ConversionError( SNBTError ):
    """
    ConversionError( value )

    This exception is raised when failing to find a tag class to convert a non-tag value to.
    This often happens when value is an int or float; the type to convert to would be ambiguous:
        * int could be converted TAG_Byte, TAG_Short, TAG_Int, or TAG_Long.
        * float could be converted TAG_Float or TAG_Double.
    If you run into this problem, specify the tag type you want.
    e.g.
        comp["myNumber"] = 5             #Raises an exception if myNumber doesn't exist. Instead of this...
        comp["myNumber"] = TAG_Int( 5 )  #...try this
        comp.int( "myNumber", 5 )        #...or this
        ls = TAG_List( [ 1, 2 ], TAG_Int )
    """
    def __str__( self ):
        return "Unable to convert value of type \"{}\" to a tag.".format( self.args[0].__class__.__name__ )

class DuplicateNameError( SNBTError ):
    """
    DuplicateNameError( name )

    This exception is raised when a name is added to a TAG_Compound that already has a tag with that name.
    """
    @property
    def name( self ):
        return self.args[0]

    def __str__( self ):
        return "There is already a tag with the name \"{}\" in this TAG_Compound.".format( self.args[0] )

class UnknownTagTypeError( SNBTError ):
    """
    UnknownTagTypeError( tagType )

    This exception is raised when looking up a tag type that isn't one of the TAG_* constants above.
    """
    def __str__( self ):
        return "Unknown or unsupported tag type: {}".format( self.args[0] )

class OutOfBoundsError( SNBTError ):
    """
    OutOfBoundsError( value, min, max, tagType )

    This exception is raised when constructing an integral tag (byte, short, int, long) with a value its type cannot represent.
    value is the int that was given, or the literal text (e.g. "-99999999999999999999") if the range was checked without converting it.
    tooHigh tells the two cases apart (value > max, or value < min).
    """
    value   = property( lambda self: self.args[0] )
    min     = property( lambda self: self.args[1] )
    max     = property( lambda self: self.args[2] )
    tagType = property( lambda self: self.args[3] )

    @property
    def tooHigh( self ):
        v = self.args[0]
        if isinstance( v, str ):
            return not v.startswith( "-" )
        return v > self.args[2]

    def __str__( self ):
        return "Value {} is outside of the range [{},{}] of {}.".format( _shortValue( self.args[0] ), self.args[1], self.args[2], describeTag( self.args[3] ) )

class InvalidFormatError( SNBTError ):
    """
    InvalidFormatError( text )

    This exception is raised when a TAG_Long is constructed from a str that isn't a decimal integer literal,
    i.e. one that doesn't match [-+]?(0|[1-9][0-9]*). Leading zeros such as "01" or "00" are not allowed.
    """
    def __str__( self ):
        return "Badly formatted TAG_Long string: \"{}\"".format( self.args[0] )

class ParsingError( SNBTError ):
    """
    ParsingError( message, position, context, suggestion=None )

    This exception is raised when SNBT text cannot be parsed.
    message is a description of the problem.
    position is the index in the text the parser had reached.
    context is up to 35 characters of text ending at position (prefixed with "..." if there was more), with newlines shown as "↵".
    suggestion is an optional hint on how to fix the problem.

    When the problem was detected by the tag classes (e.g. a WrongTagError), that exception is chained as __cause__.
    """
    message    = property( lambda self: self.args[0] )
    position   = property( lambda self: self.args[1] )
    context    = property( lambda self: self.args[2] )
    suggestion = property( lambda self: self.args[3] if len( self.args ) > 3 else None )

    def __str__( self ):
        return "{} at: {}<--[HERE]".format( self.args[0], self.args[2] )

class TrailingDataError( ParsingError ):
    """This exception is raised when there is something other than whitespace after the parsed value."""
    pass

def describeTag( tagType ):
    """
    Returns a short description of a tag with the given tagType, including the internal name and numeric type (e.g. TAG_Compound (10) ).
    tagType is expected to be a number.
    If tagType does not represent a valid tag, returns "Unknown (<tagType>)".
    """
    if tagType <= 0 or tagType >= TAG_COUNT:
        return "Unknown ({:d})".format( tagType )
    return "{} ({:d})".format( TAG_NAMES[tagType], tagType )

#Returns value as text for an error message, shortened if it's too long to be useful.
#Huge ints are described by their size; int <-> str conversion refuses anything over a few thousand digits.
def _shortValue( value ):
    if isinstance( value, int ) and value.bit_length() > 128:
        return "{}<{:d}-bit integer>".format( "-" if value < 0 else "", value.bit_length() )
    text = str( value )
    if len( text ) > 40:
        return "{}... ({:d} characters)".format( text[:20], len( text ) )
    return text

#_avtt
def assertValidTagType( tagType ):
    """Raises UnknownTagTypeError if the given tagType is unrecognized"""
    if not isinstance( tagType, int ) or tagType <= TAG_END or tagType >= TAG_COUNT:
        raise UnknownTagTypeError( tagType )

#_pls
def parseLongString( text ):
    """
    Converts a decimal integer literal (without an "l" suffix) to an int in TAG_Long's range.

    The magnitude is checked digit by digit against LONG_MIN / LONG_MAX before anything is converted:
    a literal with more than 19 digits is out of range, and one with exactly 19 is compared to the limit lexicographically.
    Raises InvalidFormatError if text isn't a decimal integer literal.
    Raises OutOfBoundsError if the literal is outside of TAG_Long's range; the error's value is the literal itself.
    """
    sign = text[:1]
    if sign == "+" or sign == "-":
        digits = text[1:]
    else:
        sign, digits = "", text

    if digits == "0":
        return 0
    if _LONG_DIGITS_RE.fullmatch( digits ) is None:
        raise InvalidFormatError( text )

    limit = _LONG_MIN_DIGITS if sign == "-" else _LONG_MAX_DIGITS
    if len( digits ) > len( limit ) or ( len( digits ) == len( limit ) and digits > limit ):
        raise OutOfBoundsError( text, LONG_MIN, LONG_MAX, TAG_LONG )
    return int( text )
