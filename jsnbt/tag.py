"""
JSNBT's tag module provides a DOM-style interface for building, modifying and inspecting SNBT documents.

Every kind of SNBT value has a TAG_* class here. Each one subclasses the Python type closest to it
(int, float, str, list, OrderedDict) so a tag works the same way and in the same places that type would.
"""
import re

from collections import OrderedDict

from jsnbt.shared import (
    SNBTError, WrongTagError, ConversionError, DuplicateNameError, OutOfBoundsError,
    TAG_END, TAG_BYTE, TAG_SHORT, TAG_INT, TAG_LONG, TAG_FLOAT, TAG_DOUBLE, TAG_BYTE_ARRAY, TAG_STRING, TAG_LIST, TAG_COMPOUND, TAG_INT_ARRAY, TAG_LONG_ARRAY,
    TAG_NAMES, SORT_ORDERS,
    BYTE_MIN, BYTE_MAX, SHORT_MIN, SHORT_MAX, INT_MIN, INT_MAX, LONG_MIN, LONG_MAX,
    FLOAT_MAX, DOUBLE_MAX, FLOAT_CLAMP, DOUBLE_CLAMP, FLOAT_CLAMP_TEXT, DOUBLE_CLAMP_TEXT,

    assertValidTagType as _avtt, parseLongString as _pls
)

#Base class methods called at various locations
_int_new        = int.__new__
_int_repr       = int.__repr__
_float_new      = float.__new__
_float_repr     = float.__repr__
_str_new        = str.__new__
_str_repr       = str.__repr__
_list_new       = list.__new__
_list_init      = list.__init__
_list_append    = list.append
_list_insert    = list.insert
_list_setitem   = list.__setitem__
_list_iadd      = list.__iadd__
_list_repr      = list.__repr__
_od_setitem     = OrderedDict.__setitem__

#Characters that can appear in an unquoted string. Anything else forces quotes.
_QUOTED_CHAR_RE = re.compile( r"[^a-zA-Z0-9._+\-]" )

def textNeedsQuotes( text, isKey=False ):
    """
    Returns True if text has to be quoted to be read back as the same string.

    This is the case if text is empty, or contains a character other than A-Z, a-z, 0-9, ".", "_", "+" and "-".
    Strings that aren't compound keys also need quotes if they would be read as a number (e.g. "5", "1.5f", "true").
    A numeric-looking literal that's out of range (e.g. "300b") doesn't need quotes; the parser reads it as a string anyway.
    """
    if text == "" or _QUOTED_CHAR_RE.search( text ) is not None:
        return True
    if isKey:
        return False

    #jsnbt.number builds its tags with the classes in this module, so it's imported here rather than at the top.
    from jsnbt.number import parseNumber
    try:
        return parseNumber( text ) is not None
    except SNBTError:
        return False

#Returns a method that creates tags of the given class and appends them to a TAG_List.
def _makeTagAppender( methodname, tagclass ):
    def appender( self, *args, **kwargs ):
        t = tagclass( *args, **kwargs )
        self.append( t )
        return t
    #Override appender.__name__ so help( tagclass ) shows this as "methodname( self, value )" instead of "methodname = appender( self, value )"
    appender.__name__ = methodname
    appender.__doc__ = \
        """
        Appends a new {} to the end of this TAG_List, passing the given arguments to the tag's constructor.
        Returns the new tag.
        """.format( tagclass.__name__ )
    return appender

#Returns a method that creates tags of the given class and adds or replaces a tag in a TAG_Compound with the given name.
def _makeTagSetter( methodname, tagclass ):
    def setter( self, *args, **kwargs ):
        #name is taken from args so a keyword argument called "name" can still be passed to the tag's constructor.
        l = len( args )
        if l < 1:
            raise TypeError( "{} takes at least 1 positional argument but {:d} were given".format( methodname, l ) )
        name, *args = args

        if not isinstance( name, str ):
            raise TypeError( "Attempted to set a non-str key on TAG_Compound." )
        t = tagclass( *args, **kwargs )
        _od_setitem( self, name, t )
        return t
    setter.__name__ = methodname
    setter.__doc__ = \
        """
        {0:}(self, name, *args, **kwargs) -> {1:}

        Creates a new {1:}, passing the given arguments to the tag's constructor.
        Sets self[name] to the new tag, then returns the new tag.
        """.format( methodname, tagclass.__name__ )
    return setter

#Returns an NBT class that stores an integral primitive: byte, short or int.
def _makeIntPrimitiveClass( classname, tt, vmin, vmax, suffix, **kwargs ):
    class _IntPrimitiveTag( _BaseIntTag ):
        __slots__ = ()
    _IntPrimitiveTag.tagType = tt
    _IntPrimitiveTag.min     = vmin
    _IntPrimitiveTag.max     = vmax
    _IntPrimitiveTag.suffix  = suffix
    for n,v in kwargs.items():
        setattr( _IntPrimitiveTag, n, v )

    _IntPrimitiveTag.__name__     = classname
    _IntPrimitiveTag.__qualname__ = classname
    _IntPrimitiveTag.__doc__ = \
        """
        Represents a {0:}.
        {0:} is an int subclass and generally works the same way and in the same places as an int would.
        Its value must be in the range [{1:d}, {2:d}]; OutOfBoundsError is raised otherwise.
        """.format( classname, vmin, vmax )
    return _IntPrimitiveTag

class _BaseTag:
    """Base class for all jsnbt tag classes."""
    tagType     = -1
    tagName     = ""
    sortOrder   = -1

    #Simple means to check if a tag is a specific tagType
    isByte      = False
    isShort     = False
    isInt       = False
    isLong      = False
    isString    = False
    isFloat     = False
    isDouble    = False
    isByteArray = False
    isList      = False
    isCompound  = False
    isIntArray  = False
    isLongArray = False

    #Simple means to check properties of the tag
    isPrimitive = False #True for TAG_String and the numeric tags. Lists of primitives are printed on one line.
    isNumeric   = False #True for TAG_Byte, TAG_Short, TAG_Int, TAG_Long, TAG_Float, TAG_Double
    isIntegral  = False #True for TAG_Byte, TAG_Short, TAG_Int, TAG_Long
    isReal      = False #True for TAG_Float, TAG_Double
    isArray     = False #True for TAG_Byte_Array, TAG_Int_Array, TAG_Long_Array

    __slots__ = ()

    def rget( self, *args, default=None ):
        """
        Recursive get.

        Gets the tag inside of this tag whose name or index is the first argument.
        If there is no such tag, returns default (which is None by default).
        If there is such a tag and len( args ) > 1, recursively calls rget() on the found tag with the remaining arguments.
        Otherwise, returns the found tag.

        Example:
            #Throws an exception if "display" or "Name" is missing:
            name = item["tag"]["display"]["Name"]

            #Does the same thing, but returns None instead of throwing an exception:
            name = item.rget( "tag", "display", "Name" )
        """
        if len( args ) == 0:
            raise TypeError( "rget() takes at least 1 argument but 0 were given." )
        return default

class _BaseIntTag( int, _BaseTag ):
    """
    Base class for all integral tags (TAG_Byte, TAG_Short, TAG_Int, TAG_Long).
    Defines two static members min and max that represent the bounds (inclusive) of the range of values that can be represented by that tag.
    The constructor raises an OutOfBoundsError if the value is outside of these bounds.
    """
    isPrimitive = True
    isNumeric   = True
    isIntegral  = True

    value = property( int, doc="Read-only property. Converts this tag to an int." )

    __slots__ = ()

    min    =  1
    max    = -1
    suffix = ""

    def __init__( self, value=0 ):
        #Note: self is set by int's __new__ prior to calling __init__.
        #self is guaranteed to be an int, unlike value.
        if self < self.min or self > self.max:
            raise OutOfBoundsError( _int_new( int, self ), self.min, self.max, self.tagType )

    def __repr__( self ):
        return "{}({})".format( self.__class__.__name__, _int_repr( self ) )

TAG_Byte  = _makeIntPrimitiveClass( "TAG_Byte",  TAG_BYTE,  BYTE_MIN,  BYTE_MAX,  "b", isByte  = True )
TAG_Short = _makeIntPrimitiveClass( "TAG_Short", TAG_SHORT, SHORT_MIN, SHORT_MAX, "s", isShort = True )
TAG_Int   = _makeIntPrimitiveClass( "TAG_Int",   TAG_INT,   INT_MIN,   INT_MAX,   "",  isInt   = True )

class TAG_Long( _BaseIntTag ):
    """
    Represents a TAG_Long.
    TAG_Long is an int subclass and generally works the same way and in the same places as an int would.

    A TAG_Long can be constructed from an int, or from a decimal literal such as "-9223372036854775808".
    Literals are validated as text before they're converted:
        InvalidFormatError is raised for anything that isn't [-+]?(0|[1-9][0-9]*) (e.g. "01", "1.5").
        OutOfBoundsError is raised if the literal is outside of [-9223372036854775808, 9223372036854775807].
    """
    tagType = TAG_LONG
    isLong  = True
    min     = LONG_MIN
    max     = LONG_MAX
    suffix  = "l"

    __slots__ = ()

    def __new__( cls, value=0 ):
        if isinstance( value, str ):
            value = _pls( value )
        return _int_new( cls, value )

class _BaseRealTag( float, _BaseTag ):
    """
    Base class for TAG_Float and TAG_Double.

    Values whose magnitude is larger than max are clamped rather than rejected:
    the tag stores clamp (or -clamp), and is printed as the literal clampText (or "-" + clampText).
    """
    isPrimitive = True
    isNumeric   = True
    isReal      = True

    value = property( float, doc="Read-only property. Converts this tag to a float." )

    __slots__ = ()

    max       = 0.0
    clamp     = 0.0
    clampText = ""

    def __new__( cls, value=0.0 ):
        value = float( value )
        if value > cls.max:
            value = cls.clamp
        elif value < -cls.max:
            value = -cls.clamp
        return _float_new( cls, value )

    @property
    def isClamped( self ):
        """True if this tag holds the clamp value, i.e. it was constructed with a value too large to represent."""
        return self > self.max or self < -self.max

    def __repr__( self ):
        return "{}({})".format( self.__class__.__name__, _float_repr( self ) )

class TAG_Float( _BaseRealTag ):
    """
    Represents a TAG_Float.
    TAG_Float is a float subclass and generally works the same way and in the same places as a float would.

    Values beyond +/-3.4028234663852886e+38 (the largest binary32 value) are stored as +/-9e99 and printed as 9e99f.
    """
    tagType   = TAG_FLOAT
    isFloat   = True
    suffix    = "f"
    max       = FLOAT_MAX
    clamp     = FLOAT_CLAMP
    clampText = FLOAT_CLAMP_TEXT

    __slots__ = ()

class TAG_Double( _BaseRealTag ):
    """
    Represents a TAG_Double.
    TAG_Double is a float subclass and generally works the same way and in the same places as a float would.

    Values beyond the largest finite double are stored as +/-9e999 (an infinity) and printed as 9e999d.
    """
    tagType   = TAG_DOUBLE
    isDouble  = True
    suffix    = "d"
    max       = DOUBLE_MAX
    clamp     = DOUBLE_CLAMP
    clampText = DOUBLE_CLAMP_TEXT

    __slots__ = ()

class TAG_String( str, _BaseTag ):
    """
    Represents a TAG_String.
    TAG_String is a str subclass and generally works the same way and in the same places as a str would.

    TAG_String( value="", isKey=False )

    isKey marks strings used as TAG_Compound keys. Keys are never mistaken for numbers, so they need quotes less often.
    needsQuotes is computed when the string is created; see help( textNeedsQuotes ).
    limitError is None, unless the parser read this string from a number literal that was out of range;
    in that case it's the OutOfBoundsError / InvalidFormatError that was raised for the literal.
    """
    tagType     = TAG_STRING
    isString    = True
    isPrimitive = True

    value = property( str, doc="Read-only property. Converts this tag to a str." )

    def __new__( cls, value="", isKey=False ):
        self = _str_new( cls, value )
        self.isKey       = bool( isKey )
        self.needsQuotes = textNeedsQuotes( self, self.isKey )
        self.limitError  = None
        return self

    def __repr__( self ):
        return "TAG_String({})".format( _str_repr( self ) )

class TAG_List( list, _BaseTag ):
    """
    Represents a TAG_List.
    TAG_List is a list subclass and generally works the same way and in the same places as a list would.

    All tags in a list must be of the same type. That type (listTagType) is fixed by the first tag added to the list,
    and every tag added afterwards must be of that type; WrongTagError is raised otherwise.
    listTagType is TAG_END while the list doesn't have a type yet.
    """
    tagType     = TAG_LIST
    isList      = True
    arrayPrefix = ""

    __slots__ = "listTagType"

    def __init__( self, iterable=(), listTagType=None ):
        """
        TAG_List constructor.
        Initializes a new TAG_List, optionally with a given iterable.

        iterable is an optional parameter that determines the initial contents of the list. Defaults to an empty tuple.
            Its values can be tags (e.g. TAG_String( "Example" ) ) or non-tag values that can be converted to tags (e.g. "Example").
        listTagType is an optional parameter specifying the class of tags stored by this list.
            If this is None (the default), the type is fixed by the first value added to the list.
            Typically this parameter is only needed when making lists of int/float based tags from plain numbers.

        Examples:
            #List of strings
            ls = jsnbt.TAG_List( ( "Check", "out", "these", "strings!" ) )

            #Numbers 0-9 as a list of TAG_Int
            ls = jsnbt.TAG_List( range(10), jsnbt.TAG_Int )
        """
        _list_init( self )
        if listTagType is None:
            self.listTagType = TAG_END
        else:
            _avtt( listTagType.tagType )
            self.listTagType = listTagType.tagType
        for v in iterable:
            _list_append( self, self._a( v ) )

    def append( self, value ):
        """Adds a tag to the end of this list. The first tag added fixes the type of the list."""
        _list_append( self, self._a( value ) )

    push = append

    def insert( self, index, value ):
        _list_insert( self, index, self._a( value ) )

    def extend( self, iterable ):
        for v in iterable:
            _list_append( self, self._a( v ) )

    def __iadd__( self, iterable ):
        self.extend( iterable )
        return self

    def __setitem__( self, key, value ):
        """
        Handle self[key] = value.

        If key is an int, value should be a single value. If key is a slice, value should be an iterable of values.
        Values must be tags of this list's type, or non-tags that can be converted to it.
        """
        if isinstance( key, slice ):
            value = [ self._a( v ) for v in value ]
        elif len( self ) == 0:
            raise IndexError( "list assignment index out of range" )
        else:
            value = self._a( value )
        _list_setitem( self, key, value )

    def copy( self ):
        l = _list_new( self.__class__ )
        l.listTagType = self.listTagType
        _list_iadd( l, self )
        return l

    def __repr__( self ):
        return "{}({})".format( self.__class__.__name__, _list_repr( self ) if len( self ) > 0 else "" )

    def rget( self, *args, default=None ):
        l = len( args )
        if l == 0:
            raise TypeError( "rget() takes at least 1 argument but 0 were given." )
        i = args[0]
        if not isinstance( i, int ) or i >= len( self ) or i < 0:
            return default
        if l == 1:
            return self[i]
        return self[i].rget( *args[1:], default=default )

    #Called whenever a value is added to the list.
    #Converts non-tags to a tag, checks the tag's type against the list's type, and fixes the list's type if it doesn't have one yet.
    #Returns the (possibly converted) value.
    def _a( self, value ):
        ltt = self.listTagType
        t = getattr( value, "tagType", None )
        if t is None:
            c = _TAGCLASS[ltt] if ltt != TAG_END else _TAGMAP.get( value.__class__ )
            if c is None:
                raise ConversionError( value )
            value = c( value )
            t = c.tagType

        if ltt == TAG_END:
            self.listTagType = t
        elif t != ltt:
            raise WrongTagError( ltt, t )
        return value

def _makeArrayClass( classname, tt, elementClass, prefix, **kwargs ):
    class _ArrayTag( TAG_List ):
        __slots__ = ()
        def __init__( self, iterable=() ):
            TAG_List.__init__( self, iterable, elementClass )
    _ArrayTag.tagType     = tt
    _ArrayTag.isArray     = True
    _ArrayTag.arrayPrefix = prefix
    for n,v in kwargs.items():
        setattr( _ArrayTag, n, v )

    _ArrayTag.__name__     = classname
    _ArrayTag.__qualname__ = classname
    _ArrayTag.__doc__ = \
        """
        Represents a {0:}.
        {0:} is a TAG_List that can only hold {1:}s, written with a "{2:}" prefix, e.g. [{2:}1{3:},2{3:}].
        Plain ints added to it are converted to {1:}.
        """.format( classname, elementClass.__name__, prefix, elementClass.suffix )
    return _ArrayTag

TAG_Byte_Array = _makeArrayClass( "TAG_Byte_Array", TAG_BYTE_ARRAY, TAG_Byte, "B;", isByteArray = True )
TAG_Int_Array  = _makeArrayClass( "TAG_Int_Array",  TAG_INT_ARRAY,  TAG_Int,  "I;", isIntArray  = True )
TAG_Long_Array = _makeArrayClass( "TAG_Long_Array", TAG_LONG_ARRAY, TAG_Long, "L;", isLongArray = True )

class TAG_Compound( OrderedDict, _BaseTag ):
    """
    Represents a TAG_Compound.
    TAG_Compound is an OrderedDict subclass and generally works the same way and in the same places any other mapping (dict, etc.) would, with one major exception:
    The keys and values of a TAG_Compound are restricted to str and TAG_* objects (e.g. TAG_Byte, TAG_Compound, etc) respectively.
    Entries are written in the order they were added.

    A TAG_Compound can be initialized in the same ways a normal dict / OrderedDict can:
        * TAG_Compound( { k: v, ... } ):  From another mapping (e.g. dict, OrderedDict, etc).
        * TAG_Compound( [ (k,v), ... ] ): With an iterable of pairs
        * TAG_Compound( name=v, ... ):    With keyword arguments. Can be combined with either of the previous two choices.
    """
    tagType    = TAG_COMPOUND
    isCompound = True

    __slots__ = ()

    def __setitem__( self, key, value ):
        """
        Handle self[key] = value. Replaces the tag if key is already in use; see add() to refuse that instead.

        key must be a str. If it isn't, TypeError is raised.

        value can be a tag or a non-tag.
        If a non-tag is provided, it is converted to a tag according to the following rules:
            If a tag with the given name already exists, value is converted to the existing tag's type.
            If no such tag exists, value is converted to the tag class mapped to the value's Python type.
            If both of these attempts fail, a ConversionError is raised.

        Examples:
            comp["str"]  = jsnbt.TAG_String( "Example!" )
            comp["byte"] = jsnbt.TAG_Byte( 5 )

            comp["str"]  = "Another example!"
            comp["byte"] = -5
        """
        if not isinstance( key, str ):
            raise TypeError( "Attempted to set a non-str key on TAG_Compound." )

        if not hasattr( value, "tagType" ):
            temp = self.get( key )
            if temp is None:
                temp = _TAGMAP.get( value.__class__ )
                if temp is None:
                    raise ConversionError( value )
                value = temp( value )
            else:
                value = temp.__class__( value )

        _od_setitem( self, key, value )

    def add( self, key, value ):
        """
        Adds value to this compound under the given key.
        Raises DuplicateNameError if the key is already in use.
        """
        if key in self:
            raise DuplicateNameError( key )
        self[key] = value

    def remove( self, key ):
        """Removes the tag with the given key and returns it. Returns None if there is no such tag."""
        return self.pop( key, None )

    def copy( self ):
        return TAG_Compound( self )

    def rget( self, *args, default=None ):
        l = len( args )
        if l == 0:
            raise TypeError( "rget() takes at least 1 argument but 0 were given." )
        elif l == 1:
            return self.get( args[0], default )
        tag = self.get( args[0] )
        if tag is None:
            return default
        return tag.rget( *args[1:], default=default )

#Tuple of tag classes indexed by tagType.
#Do _TAGCLASS[tagType] to get the class for the tag with that tagType.
_TAGCLASS = (
    None,           #TAG_END
    TAG_Byte,       #TAG_BYTE
    TAG_Short,      #TAG_SHORT
    TAG_Int,        #TAG_INT
    TAG_Long,       #TAG_LONG
    TAG_Float,      #TAG_FLOAT
    TAG_Double,     #TAG_DOUBLE
    TAG_Byte_Array, #TAG_BYTE_ARRAY
    TAG_String,     #TAG_STRING
    TAG_List,       #TAG_LIST
    TAG_Compound,   #TAG_COMPOUND
    TAG_Int_Array,  #TAG_INT_ARRAY
    TAG_Long_Array  #TAG_LONG_ARRAY
)

for _c in _TAGCLASS[1:]:
    _c.tagName   = TAG_NAMES[ _c.tagType ]
    _c.sortOrder = SORT_ORDERS[ _c.tagType ]

#Note: Have to create these methods here because the target classes don't exist until this point:
for _n, _c in (
    ( "byte",      TAG_Byte       ),
    ( "short",     TAG_Short      ),
    ( "int",       TAG_Int        ),
    ( "long",      TAG_Long       ),
    ( "float",     TAG_Float      ),
    ( "double",    TAG_Double     ),
    ( "string",    TAG_String     ),
    ( "list",      TAG_List       ),
    ( "compound",  TAG_Compound   ),
    ( "bytearray", TAG_Byte_Array ),
    ( "intarray",  TAG_Int_Array  ),
    ( "longarray", TAG_Long_Array )
):
    setattr( TAG_List,     _n, _makeTagAppender( _n, _c ) )
    setattr( TAG_Compound, _n, _makeTagSetter(   _n, _c ) )
del _n, _c

#Mapping of python types -> tag classes.
#SNBT doesn't have a boolean type. A TAG_Byte with a value of 0 for False and 1 for True is used instead (the parser reads true/false the same way).
#Tag type deduction is not possible for the int and float python types because it would be ambiguous;
#int could be deduced as TAG_Byte, TAG_Short, TAG_Int, or TAG_Long,
#and float could be deduced as TAG_Float or TAG_Double.
_TAGMAP = {
    bool:        TAG_Byte,
    str:         TAG_String,
    list:        TAG_List,
    tuple:       TAG_List,
    dict:        TAG_Compound,
    OrderedDict: TAG_Compound
}

def getTagClass( tagType ):
    """
    Returns the tag class with the given tagType (1-12, the same IDs as binary NBT uses).
    Raises UnknownTagTypeError for anything else, including TAG_END.
    """
    _avtt( tagType )
    return _TAGCLASS[ tagType ]

def tagEquals( a, b ):
    """
    Returns True if a and b are structurally equal tags.

    Unlike ==, this tells tags apart by type (TAG_Byte( 1 ) and TAG_Int( 1 ) are not equal),
    and ignores the order of entries in a TAG_Compound.
    Lists are compared element by element, in order.
    """
    if a.__class__ is not b.__class__:
        return False
    if getattr( a, "isCompound", False ):
        if len( a ) != len( b ):
            return False
        for k, v in a.items():
            if k not in b or not tagEquals( v, b[k] ):
                return False
        return True
    if getattr( a, "isList", False ):
        return len( a ) == len( b ) and all( tagEquals( x, y ) for x, y in zip( a, b ) )
    if getattr( a, "isReal", False ) and a != a:
        #NaN
        return b != b
    return a == b
