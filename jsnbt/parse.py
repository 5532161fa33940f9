import logging
import re

from jsnbt.shared import (
    SNBTError, WrongTagError, DuplicateNameError, ParsingError, TrailingDataError,
    TAG_BYTE_ARRAY, TAG_INT_ARRAY, TAG_LONG_ARRAY, TAG_NAMES
)
from jsnbt.tag import TAG_String, TAG_List, TAG_Compound, TAG_Byte_Array, TAG_Int_Array, TAG_Long_Array
from jsnbt.number import parseNumber

_log = logging.getLogger( __name__ )

#Longest stretch of input shown before the cursor in a ParsingError
CONTEXT_LENGTH = 35

_WHITESPACE_RE = re.compile( r"\s*" )
_UNQUOTED_RE   = re.compile( r"[a-zA-Z0-9._+\-]*" )

#Typed array classes by the letter in their "[X;" prefix
_ARRAYS = {
    "B": TAG_Byte_Array,
    "I": TAG_Int_Array,
    "L": TAG_Long_Array
}

def parse( text ):
    """
    Parses an SNBT document and returns it as a TAG_Compound.

    text is a str holding exactly one compound, e.g. '{id:"minecraft:stone",Count:1b}'.
    Whitespace is allowed around the compound and between tokens.

    Raises ParsingError (with the position and a snippet of the text leading up to it) if text isn't valid SNBT,
    and TrailingDataError (a ParsingError) if there is anything but whitespace after the compound.
    """
    reader = SNBTReader( text )
    compound = reader.readCompound()
    reader.finish()
    return compound

def parseValue( text ):
    """
    Parses a single SNBT value of any type and returns it as a tag.
    e.g. parseValue( "[I;1,2,3]" ) returns TAG_Int_Array([TAG_Int(1), TAG_Int(2), TAG_Int(3)]).

    Raises the same exceptions as parse().
    """
    reader = SNBTReader( text )
    value = reader.readValue()
    reader.finish()
    return value

class SNBTReader:
    """
    Recursive-descent reader for SNBT text.

    A reader works through its text with a single cursor that only moves forward.
    Each read*() method reads one construct starting at the cursor, leaves the cursor just past it and returns a tag.
    A reader is good for one parse; create a new one for every text.
    """
    def __init__( self, text ):
        self.string = text
        self.cursor = 0

    def canRead( self ):
        return self.cursor < len( self.string )

    def peek( self, offset=0 ):
        """Returns the character offset characters past the cursor, or "" if that's past the end of the text."""
        i = self.cursor + offset
        return self.string[i] if i < len( self.string ) else ""

    def pop( self ):
        """Returns the character at the cursor ("" at the end of the text) and moves past it."""
        c = self.peek()
        self.cursor += 1
        return c

    def skipWhitespace( self ):
        self.cursor = _WHITESPACE_RE.match( self.string, self.cursor ).end()

    def hasElementSeparator( self ):
        """Skips past a comma (and the whitespace around it) if there is one. Returns True if there was."""
        self.skipWhitespace()
        if self.canRead() and self.peek() == ",":
            self.cursor += 1
            self.skipWhitespace()
            return True
        return False

    def expect( self, expected ):
        """Skips whitespace, then moves past the expected character. Raises ParsingError if the next character is something else."""
        self.skipWhitespace()
        canRead = self.canRead()
        if canRead and self.peek() == expected:
            self.cursor += 1
        else:
            message = "Expected '{}' but got '{}'".format( expected, self.peek() if canRead else "<EOF>" )
            self.cursor += 1
            raise self.error( message )

    def error( self, message, suggestion=None, cls=ParsingError ):
        """Returns a ParsingError for the current cursor position."""
        end = min( len( self.string ), self.cursor )
        context = "..." if end > CONTEXT_LENGTH else ""
        context += self.string[ max( 0, end - CONTEXT_LENGTH ):end ].replace( "\n", "↵" )
        if suggestion is None:
            return cls( message, self.cursor, context )
        return cls( message, self.cursor, context, suggestion )

    def finish( self ):
        """Raises TrailingDataError if there is anything but whitespace left after the cursor."""
        self.skipWhitespace()
        if self.canRead():
            self.cursor += 1
            raise self.error( "Trailing data found", cls=TrailingDataError )

    def readValue( self ):
        """Reads any value: a compound, list, typed array, quoted string, number or unquoted string."""
        self.skipWhitespace()
        if not self.canRead():
            raise self.error( "Expected a value" )

        c = self.peek()
        if c == "{":
            return self.readCompound()
        elif c == "[":
            if self.peek( 1 ) != "\"" and self.peek( 2 ) == ";":
                return self.readArrayTag()
            return self.readListTag()
        elif c == "\"" or c == "'":
            return TAG_String( self.readQuotedString() )

        s = self.readUnquotedString()
        if not s:
            raise self.error( "Expected a value" )
        try:
            num = parseNumber( s )
        except SNBTError as e:
            #Looks like a number, but isn't a valid one (e.g. 300b). Keep it as a string instead of failing.
            _log.debug( "Reading %r as a string: %s", s, e )
            tag = TAG_String( s )
            tag.limitError = e
            return tag
        if num is None:
            return TAG_String( s )
        return num

    def readCompound( self ):
        """Reads a TAG_Compound: { key: value, ... }"""
        self.expect( "{" )
        compound = TAG_Compound()
        self.skipWhitespace()

        while self.canRead() and self.peek() != "}":
            self.skipWhitespace()
            if not self.canRead():
                raise self.error( "Expected a key" )
            c = self.peek()
            if c == "\"" or c == "'":
                key = self.readQuotedString()
            else:
                key = self.readUnquotedString()
                if not key:
                    raise self.error( "Expected non-empty key" )
            if key in compound:
                raise self.error( "Duplicate key" ) from DuplicateNameError( key )

            self.expect( ":" )
            compound.add( key, self.readValue() )

            if not self.hasElementSeparator():
                break
            if not self.canRead():
                raise self.error( "Expected a key" )

        self.expect( "}" )
        return compound

    def readArrayTag( self ):
        """Reads a TAG_Byte_Array, TAG_Int_Array or TAG_Long_Array: [B; ...], [I; ...], [L; ...]"""
        self.expect( "[" )
        arrayType = self.pop()
        self.pop()
        self.skipWhitespace()

        if not self.canRead():
            raise self.error( "Expected a value" )
        cls = _ARRAYS.get( arrayType )
        if cls is None:
            raise self.error( "Invalid array type '{}' found".format( arrayType ), "Use B, I or L" )
        array = cls()

        while True:
            if self.peek() == "]":
                self.cursor += 1
                return array

            value = self.readValue()
            try:
                array.append( value )
            except WrongTagError as e:
                raise self.error( "Unable to insert {} into {}".format( value.tagName, array.tagName ) ) from e

            if self.hasElementSeparator():
                if not self.canRead():
                    raise self.error( "Expected a value" )
                continue

            self.expect( "]" )
            return array

    def readListTag( self ):
        """Reads a TAG_List: [ value, ... ]"""
        self.expect( "[" )
        self.skipWhitespace()

        if not self.canRead():
            raise self.error( "Expected a value" )
        tag = TAG_List()

        while self.peek() != "]":
            value = self.readValue()
            try:
                tag.append( value )
            except WrongTagError as e:
                raise self.error( "Unable to insert {} into TAG_List of type {}".format( value.tagName, TAG_NAMES[ tag.listTagType ] ) ) from e

            if not self.hasElementSeparator():
                break
            if not self.canRead():
                raise self.error( "Expected a value" )

        self.expect( "]" )
        return tag

    def readUnquotedString( self ):
        """Reads the longest run of A-Z, a-z, 0-9, ".", "_", "+" and "-" at the cursor. The result may be empty."""
        m = _UNQUOTED_RE.match( self.string, self.cursor )
        self.cursor = m.end()
        return m.group()

    def readQuotedString( self ):
        """
        Reads a string in "double" or 'single' quotes and returns its contents as a str.
        Inside the quotes, a backslash can only escape another backslash or the quote character in use.
        """
        quote = self.pop()
        start = self.cursor
        chunks = []
        inEscape = False
        while self.canRead():
            c = self.pop()
            if inEscape:
                if c != "\\" and c != quote:
                    raise self.error( "Invalid escape of {}".format( c ) )
                chunks.append( c )
                start = self.cursor
                inEscape = False
            elif c == "\\":
                inEscape = True
                chunks.append( self.string[ start:self.cursor - 1 ] )
            elif c == quote:
                chunks.append( self.string[ start:self.cursor - 1 ] )
                return "".join( chunks )
        raise self.error( "Missing termination quote" )
