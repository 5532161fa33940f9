from functools import cmp_to_key

from jsnbt.shared import (
    UnknownTagTypeError, TAG_LIST, TAG_COUNT, SORT_ORDERS
)
from jsnbt.tag import textNeedsQuotes

def stringify( value, space="\t", **options ):
    """
    Returns the SNBT text for the given tag.

    space is the str used for one level of indentation. Defaults to a tab.
    options are the keyword arguments accepted by SNBTWriter; see help( SNBTWriter ).

    Examples:
        >>> print( jsnbt.stringify( doc ) )
        {
            name: "Jeff",
            pos: [I; 1, 2, 3]
        }
        >>> jsnbt.stringify( doc, deflate=True )
        '{name:"Jeff",pos:[I;1,2,3]}'
    """
    return SNBTWriter( space, **options ).stringify( value )

def compareAlpha( a, b ):
    """
    Compares two ( key, value ) compound entries alphabetically by key.
    Keys are compared case-insensitively first; keys that only differ in case are then compared case-sensitively.
    """
    nameA, nameB = a[0], b[0]
    nameAI, nameBI = nameA.lower(), nameB.lower()
    if nameAI < nameBI:
        return -1
    if nameAI > nameBI:
        return 1
    if nameA < nameB:
        return -1
    if nameA > nameB:
        return 1
    return 0

def compareType( a, b ):
    """
    Compares two ( key, value ) compound entries by the type of their values, in this order:
        TAG_String, TAG_Byte, TAG_Short, TAG_Int, TAG_Long, TAG_Float, TAG_Double,
        TAG_Compound, TAG_Byte_Array, TAG_Int_Array, TAG_Long_Array, TAG_List.
    Two TAG_Lists are then compared by the type of their elements (a list without a type comes first).
    """
    orderA, orderB = a[1].sortOrder, b[1].sortOrder
    if orderA < orderB:
        return -1
    if orderA > orderB:
        return 1
    if a[1].tagType != TAG_LIST:
        return 0
    orderA, orderB = SORT_ORDERS[ a[1].listTagType ], SORT_ORDERS[ b[1].listTagType ]
    if orderA < orderB:
        return -1
    if orderA > orderB:
        return 1
    return 0

def compareTypeAlpha( a, b ):
    """Compares two ( key, value ) compound entries by the type of their values (see compareType), then alphabetically by key."""
    return compareType( a, b ) or compareAlpha( a, b )

class SNBTWriter:
    """
    Turns tags into SNBT text.

    An SNBTWriter holds a set of formatting options and can be reused for any number of tags:
        w = SNBTWriter( "  ", sort=compareAlpha, trailingComma=True )
        text = w.stringify( doc )
    """
    def __init__( self, space="\t", nlBrackets=False, collapseBrackets=False, expandPrimitives=False, trailingComma=False,
                  sort=None, quoteKeys=False, unquoteStrings=False, deflate=False, capitalizeSuffix=None ):
        """
        space is the str used for one level of indentation. Defaults to a tab.
        nlBrackets puts the opening bracket of a named compound / list on its own line.
        collapseBrackets keeps adjacent brackets of a list of compounds / lists on the same line, e.g. [{ ... },{ ... }]
        expandPrimitives puts each element of a list of strings / numbers on its own line, like other lists.
            By default these lists are written on one line.
        trailingComma adds a comma after the last entry of a multi-line compound / list.
        sort is a cmp-style function for ordering compound entries, called with two ( key, value ) pairs.
            See compareAlpha, compareType and compareTypeAlpha. Entries that compare equal keep their order.
            Defaults to None, which writes entries in the order they were added.
        quoteKeys quotes every compound key, even ones that don't need it.
        unquoteStrings leaves out the quotes of string values when they aren't needed.
            By default, string values are always quoted.
        deflate removes all unnecessary whitespace; space, nlBrackets and trailingComma are then ignored.
        capitalizeSuffix is a dict deciding which number suffixes are written in upper case.
            Its keys are suffixes ("b", "s", "l", "f", "d", and "" for TAG_Int), plus "default" for suffixes it doesn't list.
            e.g. { "l": True, "default": False } writes 5L but 5b.
        """
        self.space            = space
        self.nlBrackets       = nlBrackets
        self.collapseBrackets = collapseBrackets
        self.expandPrimitives = expandPrimitives
        self.trailingComma    = trailingComma
        self.sort             = sort
        self.quoteKeys        = quoteKeys
        self.unquoteStrings   = unquoteStrings
        self.deflate          = deflate
        self.capitalizeSuffix = {} if capitalizeSuffix is None else capitalizeSuffix

        #Methods that print each type of tag, indexed by tagType
        self._p = (
            None,               #TAG_End
            self._printNumber,  #TAG_Byte
            self._printNumber,  #TAG_Short
            self._printNumber,  #TAG_Int
            self._printNumber,  #TAG_Long
            self._printNumber,  #TAG_Float
            self._printNumber,  #TAG_Double
            self._printList,    #TAG_Byte_Array
            self._printString,  #TAG_String
            self._printList,    #TAG_List
            self._printCompound,#TAG_Compound
            self._printList,    #TAG_Int_Array
            self._printList     #TAG_Long_Array
        )

    def stringify( self, value ):
        """Returns the SNBT text for the given tag."""
        return self._printValue( value, "", False )

    def _printValue( self, value, indent, hasName ):
        """
        Prints a tag of any type.
        indent is the indentation of the line value starts on.
        hasName is True if value follows a "key:" in a compound. Unless deflating, it's separated from the colon by a space.
        """
        tt = getattr( value, "tagType", None )
        if not isinstance( tt, int ) or tt <= 0 or tt >= TAG_COUNT:
            raise UnknownTagTypeError( tt )
        p = self._p[ tt ]
        if not value.isPrimitive:
            return p( value, indent, hasName )

        s = p( value )
        if hasName and not self.deflate:
            s = " " + s
        return s

    def _printString( self, value, isKey=False ):
        if isKey:
            quote = self.quoteKeys or textNeedsQuotes( value, True )
        else:
            quote = value.needsQuotes or not self.unquoteStrings
        if quote:
            return "\"" + value.replace( "\\", "\\\\" ).replace( "\"", "\\\"" ) + "\""
        return str( value )

    def _printNumber( self, value ):
        suffix = value.suffix
        cap = self.capitalizeSuffix.get( suffix )
        if cap is None:
            cap = self.capitalizeSuffix.get( "default" )
        if cap:
            suffix = suffix.upper()

        if value.isIntegral:
            return "{:d}{}".format( value, suffix )
        if value.isClamped:
            return "{}{}{}".format( "-" if value < 0 else "", value.clampText, suffix )
        return float.__repr__( value ) + suffix

    def _printCompound( self, value, indent, hasName ):
        deflate = self.deflate
        if len( value ) == 0:
            return "{}" if deflate or not hasName else " {}"

        oldIndent = indent
        indent = oldIndent + self.space
        if deflate:
            parts = [ "{" ]
        elif hasName:
            parts = [ "\n" + oldIndent + "{\n" if self.nlBrackets else " {\n" ]
        else:
            parts = [ "{\n" ]

        items = list( value.items() )
        if self.sort is not None:
            #sorted() is stable, so entries that compare equal keep their relative order.
            items = sorted( items, key=cmp_to_key( self.sort ) )

        last = len( items ) - 1
        for i, ( k, v ) in enumerate( items ):
            if not deflate:
                parts.append( indent )
            parts.append( self._printString( k, True ) + ":" )
            parts.append( self._printValue( v, indent, True ) )
            if i != last:
                parts.append( "," if deflate else ",\n" )
            elif not deflate:
                if self.trailingComma:
                    parts.append( "," )
                parts.append( "\n" + oldIndent )
        parts.append( "}" )
        return "".join( parts )

    def _printList( self, value, indent, hasName ):
        deflate = self.deflate
        lead = " " if hasName and not deflate else ""
        prefix = value.arrayPrefix
        if len( value ) == 0:
            return lead + "[" + prefix + "]"

        isPrimitive = value[0].isPrimitive
        if isPrimitive and not self.expandPrimitives:
            #One line
            start = lead + "[" + prefix
            if prefix and not deflate:
                start += " "
            return start + ( "," if deflate else ", " ).join( self._printValue( t, "", False ) for t in value ) + "]"

        #Multi-line
        collapse = not isPrimitive and self.collapseBrackets
        oldIndent = indent
        if not collapse:
            indent = oldIndent + self.space
        opening = "[" + prefix
        if deflate:
            parts = [ opening ]
        else:
            if hasName:
                parts = [ ( "\n" + oldIndent if self.nlBrackets else " " ) + opening ]
            else:
                parts = [ opening ]
            if not collapse:
                parts.append( "\n" )

        last = len( value ) - 1
        for i, t in enumerate( value ):
            if not ( deflate or i == 0 and collapse ):
                parts.append( indent )
            parts.append( self._printValue( t, indent, False ) )
            if i != last:
                parts.append( "," if deflate else ",\n" )
            elif not ( collapse or deflate ):
                if self.trailingComma:
                    parts.append( "," )
                parts.append( "\n" + oldIndent )
        parts.append( "]" )
        return "".join( parts )
