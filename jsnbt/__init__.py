"""
JSNBT is a library for reading and writing Stringified NBT (SNBT), the text form of Minecraft's NBT data, for Python 3.
SNBT text is parsed into a tree of TAG_* objects, which can be inspected, modified and written back out as text.
"""

#NBT Tag Types, Exceptions
from jsnbt.shared import (
    TAG_END, TAG_BYTE, TAG_SHORT, TAG_INT, TAG_LONG, TAG_FLOAT, TAG_DOUBLE, TAG_BYTE_ARRAY, TAG_STRING, TAG_LIST, TAG_COMPOUND, TAG_INT_ARRAY, TAG_LONG_ARRAY,
    TAG_NAMES, TAG_COUNT,
    SNBTError, WrongTagError, ConversionError, DuplicateNameError, UnknownTagTypeError, OutOfBoundsError, InvalidFormatError,
    ParsingError, TrailingDataError,
    describeTag
)

#TAG_* Classes
from jsnbt.tag import (
    TAG_Byte, TAG_Short, TAG_Int, TAG_Long, TAG_Float, TAG_Double, TAG_Byte_Array, TAG_String, TAG_List, TAG_Compound, TAG_Int_Array, TAG_Long_Array,
    getTagClass, tagEquals, textNeedsQuotes
)

#Number literals
from jsnbt.number import parseNumber, classifyNumber

#SNBT Parser
from jsnbt.parse import parse, parseValue, SNBTReader

#SNBT Writer
from jsnbt.writer import stringify, SNBTWriter, compareAlpha, compareType, compareTypeAlpha


#Export everything we imported above
__all__ = [
    "TAG_END", "TAG_BYTE", "TAG_SHORT", "TAG_INT", "TAG_LONG", "TAG_FLOAT", "TAG_DOUBLE", "TAG_BYTE_ARRAY", "TAG_STRING", "TAG_LIST", "TAG_COMPOUND", "TAG_INT_ARRAY", "TAG_LONG_ARRAY",
    "TAG_NAMES", "TAG_COUNT",
    "SNBTError", "WrongTagError", "ConversionError", "DuplicateNameError", "UnknownTagTypeError", "OutOfBoundsError", "InvalidFormatError",
    "ParsingError", "TrailingDataError",
    "describeTag",
    "TAG_Byte", "TAG_Short", "TAG_Int", "TAG_Long", "TAG_Float", "TAG_Double", "TAG_Byte_Array", "TAG_String", "TAG_List", "TAG_Compound", "TAG_Int_Array", "TAG_Long_Array",
    "getTagClass", "tagEquals", "textNeedsQuotes",
    "parseNumber", "classifyNumber",
    "parse", "parseValue", "SNBTReader",
    "stringify", "SNBTWriter", "compareAlpha", "compareType", "compareTypeAlpha"
]
