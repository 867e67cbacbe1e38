"""
XNBT's tag module provides a DOM-style interface for building, modifying and inspecting NBT documents.

NBTDocument and the TAG_* classes are implemented here.
Tags only hold data: reading, writing and stringifying them is done by xnbt.reader, xnbt.writer and xnbt.snbt,
which look up the codec for each tag's tagType in a TypeRegistry.
"""
from collections import OrderedDict
from array import array

from xnbt.shared import (
    WrongTagError, ConversionError, OutOfBoundsError, UnexpectedEndTagError,
    TAG_END, TAG_BYTE, TAG_SHORT, TAG_INT, TAG_LONG, TAG_FLOAT, TAG_DOUBLE, TAG_BYTE_ARRAY, TAG_STRING, TAG_LIST, TAG_COMPOUND, TAG_INT_ARRAY, TAG_LONG_ARRAY,
    INF, MAX_STRING_LENGTH, SIGNED_INT_TYPE, SIGNED_LONG_TYPE,
    _F
)

#Base class methods called at various locations
_int_repr       = int.__repr__
_float_new      = float.__new__
_float_repr     = float.__repr__
_str_add        = str.__add__
_str_mul        = str.__mul__
_str_repr       = str.__repr__
_array_new      = array.__new__
_list_init      = list.__init__
_list_append    = list.append
_list_insert    = list.insert
_list_setitem   = list.__setitem__
_list_iadd      = list.__iadd__
_list_repr      = list.__repr__
_od_setitem     = OrderedDict.__setitem__

def _makeEquality( base ):
    """
    Returns ( __eq__, __ne__ ) methods for a tag class deriving from the given builtin type.
    Tags are only equal to other tags of the same tagType; comparisons with non-tags use the builtin type's rules.
    """
    eq = base.__eq__
    def __eq__( self, other ):
        t = getattr( other, "tagType", None )
        if t is not None and t != self.tagType:
            return False
        return eq( self, other )
    def __ne__( self, other ):
        r = __eq__( self, other )
        return r if r is NotImplemented else not r
    return __eq__, __ne__

def _toFloat32( value ):
    """Rounds value to the nearest binary32 float. Values too large to be represented become infinities."""
    try:
        return _F.unpack( _F.pack( value ) )[0]
    except OverflowError:
        return -INF if value < 0 else INF

#Returns the tag class mapped to value's Python type, or None if there isn't one.
def _mapped( value ):
    if isinstance( value, array ):
        return _ARRAYMAP.get( value.typecode )
    return _TAGMAP.get( value.__class__ )

#Converts value to a tag with the given tagType, tt.
#Tags must already have that tagType; they're never converted to a different kind of tag.
#Non-tag values are converted if their Python type maps to a tag class with that tagType,
#or if they are numbers and tt is a numeric tag type.
#Otherwise, raises WrongTagError or ConversionError.
def _convert( value, tt ):
    t = getattr( value, "tagType", None )
    if t is not None:
        if t != tt:
            raise WrongTagError( tt, t )
        return value

    m = _mapped( value )
    if m is not None:
        if m.tagType != tt:
            raise WrongTagError( tt, m.tagType )
        return m( value )

    c = _TAGCLASS.get( tt )
    if c is not None:
        if c.isIntegral and isinstance( value, int ):
            return c( value )
        if c.isReal and isinstance( value, ( int, float ) ):
            return c( value )
    raise ConversionError( value, tt )

#Returns a method that creates tags of the given class and appends them to a TAG_List.
def _makeTagAppender( methodname, tagclass ):
    tt = tagclass.tagType
    def appender( self, *args, **kwargs ):
        ltt = self.listTagType
        if ltt != TAG_END and ltt != tt:
            raise WrongTagError( ltt, tt )

        #Wait until after we've successfully constructed a tag and added it to the list before we change the list tag type
        t = tagclass( *args, **kwargs )
        _list_append( self, t )
        self.listTagType = tt
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
        #Note: We do this to force name to be a positional-only argument.
        #This allows us to pass a keyword argument called "name" to the constructor of whatever tag we're constructing.
        l = len( args )
        if l < 1:
            raise TypeError( "{} takes at least 1 positional argument but {:d} were given".format( methodname, l ) )
        name, *args = args

        if not isinstance( name, str ):
            raise TypeError( "Attempted to set a non-str key on TAG_Compound." )
        t = tagclass( *args, **kwargs )

        #Since we know what the tagtype is, avoid extra cost of calling TAG_Compound.__setitem__. Use base class OrderedDict.__setitem__ instead.
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

#Returns an NBT class that stores a primitive like byte, short, int, or long.
def _makeIntPrimitiveClass( classname, tt, vmin, vmax, **kwargs ):
    class _IntPrimitiveTag( _BaseIntTag ):
        def __init__( self, value=None ):
            #Note: self is set by int's __new__ prior to calling __init__.
            #self is guaranteed to be an int, unlike value. The only reason the value parameter is here is so __init__ won't raise errors.
            if self < vmin or self > vmax:
                raise OutOfBoundsError( int( self ), vmin, vmax )
        tagType = tt
        min = vmin
        max = vmax
    for n,v in kwargs.items():
        setattr( _IntPrimitiveTag, n, v )

    _IntPrimitiveTag.__name__ = classname
    _IntPrimitiveTag.__qualname__ = classname
    _IntPrimitiveTag.__doc__ = \
        """
        Represents a {0:}.
        {0:} is an int subclass and generally works the same way and in the same places as an int would.
        Values outside of [{1:d}, {2:d}] are rejected with an OutOfBoundsError.
        """.format( classname, vmin, vmax )
    return _IntPrimitiveTag

class _BaseTag:
    """Base class for all xnbt tag classes."""
    tagType     = -1

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
    isNumeric   = False #True for TAG_Byte, TAG_Short, TAG_Int, TAG_Long, TAG_Float, TAG_Double
    isIntegral  = False #True for TAG_Byte, TAG_Short, TAG_Int, TAG_Long,
    isReal      = False #True for TAG_Float, TAG_Double
    isArray     = False #True for TAG_Byte_Array, TAG_Int_Array, TAG_Long_Array
    isSequence  = False #True for TAG_String, TAG_Byte_Array, TAG_List, TAG_Int_Array, TAG_Long_Array

    __slots__ = ()

class _BaseIntTag( int, _BaseTag ):
    """
    Base class for all primitive integer tags (TAG_Byte, TAG_Short, TAG_Int, TAG_Long).
    Defines two static members min and max that represent the bounds (inclusive) of the range of values that can be represented by that primitive.
    """
    isNumeric  = True
    isIntegral = True

    value = property( int, doc="Read-only property. Converts this tag to an int." )

    __slots__ = ()

    min =  1
    max = -1

    __eq__, __ne__ = _makeEquality( int )
    __hash__ = int.__hash__

    def __repr__( self ):
        return "{}({})".format( self.__class__.__name__, _int_repr( self ) )

TAG_Byte  = _makeIntPrimitiveClass( "TAG_Byte",  TAG_BYTE,                  -128,                 127, isByte  = True )
TAG_Short = _makeIntPrimitiveClass( "TAG_Short", TAG_SHORT,               -32768,               32767, isShort = True )
TAG_Int   = _makeIntPrimitiveClass( "TAG_Int",   TAG_INT,            -2147483648,          2147483647, isInt   = True )
TAG_Long  = _makeIntPrimitiveClass( "TAG_Long",  TAG_LONG,  -9223372036854775808, 9223372036854775807, isLong  = True )

class TAG_Float( float, _BaseTag ):
    """
    Represents a TAG_Float.
    TAG_Float is a float subclass and generally works the same way and in the same places as a float would.
    Values are rounded to single precision when the tag is constructed, so a TAG_Float always equals what would be read back from its binary form.
    """
    tagType   = TAG_FLOAT
    isFloat   = True
    isNumeric = True
    isReal    = True

    value = property( float, doc="Read-only property. Converts this tag to a float." )

    __slots__ = ()

    def __new__( cls, value=0.0 ):
        return _float_new( cls, _toFloat32( float( value ) ) )

    __eq__, __ne__ = _makeEquality( float )
    __hash__ = float.__hash__

    def __repr__( self ):
        return "TAG_Float({})".format( _float_repr( self ) )

class TAG_Double( float, _BaseTag ):
    """
    Represents a TAG_Double.
    TAG_Double is a float subclass and generally works the same way and in the same places as a float would.
    """
    tagType   = TAG_DOUBLE
    isDouble  = True
    isNumeric = True
    isReal    = True

    value = property( float, doc="Read-only property. Converts this tag to a float." )

    __slots__ = ()

    __eq__, __ne__ = _makeEquality( float )
    __hash__ = float.__hash__

    def __repr__( self ):
        return "TAG_Double({})".format( _float_repr( self ) )

class TAG_Byte_Array( bytearray, _BaseTag ):
    """
    Represents a TAG_Byte_Array.
    TAG_Byte_Array is a bytearray subclass and generally works the same way and in the same places a bytearray would.

    A TAG_Byte_Array may not contain more than 2147483647 bytes (2 GB).
    Values in a byte array are limited to the range [0,255].
    This is a Python convention; the NBT specification doesn't specify the format of bytes within a TAG_Byte_Array.
    SNBT shows these bytes as signed values. Here are some conversion formulas to go from signed bytes [-128,127] to unsigned bytes [0,255] and vice-versa:
        ubyte = sbyte if sbyte >=  0 else 256 + sbyte  #Signed byte to unsigned byte
        sbyte = ubyte if ubyte < 128 else ubyte - 256  #Unsigned byte to signed byte
    """
    tagType     = TAG_BYTE_ARRAY
    isByteArray = True
    isArray     = True
    isSequence  = True

    __slots__ = ()

    __eq__, __ne__ = _makeEquality( bytearray )
    __hash__ = None

    def __repr__( self ):
        if len( self ) > 0:
            return "TAG_Byte_Array({!r})".format( bytes( self ) )
        return "TAG_Byte_Array()"

class TAG_String( str, _BaseTag ):
    """
    Represents a TAG_String.
    TAG_String is a str subclass and generally works the same way and in the same places as a str would.

    A TAG_String can be no longer than 65535 bytes (when UTF-8 encoded).
    Note: If your string consists only of ASCII characters, the length of the string in characters (len(s)) is the same as its length in bytes (len(s.encode())).
    """
    tagType    = TAG_STRING
    isString   = True
    isSequence = True

    value = property( str, doc="Read-only property. Converts this tag to a str." )

    __slots__ = ()

    def __init__( self, *args, **kwargs ):
        #It sucks, but at the moment is the fastest correct way to get the encoded string length that Python has to offer:
        l = len( self.encode() )
        if l > MAX_STRING_LENGTH:
            raise OutOfBoundsError( l, 0, MAX_STRING_LENGTH )

    __eq__, __ne__ = _makeEquality( str )
    __hash__ = str.__hash__

    #Note: TAG_String overrides methods that modify it in place to return TAG_String, but all other methods return str.
    def __iadd__( self, value ):
        #Note: str doesn't have __iadd__
        return TAG_String( _str_add( self, value ) )

    def __imul__( self, value ):
        #Note: str doesn't have __imul__
        return TAG_String( _str_mul( self, value ) )

    def __repr__( self ):
        return "TAG_String({})".format( _str_repr( self ) )

class _BaseArrayTag( array, _BaseTag ):
    """Base class for TAG_Int_Array and TAG_Long_Array, which are array subclasses with a fixed typecode."""
    isArray    = True
    isSequence = True

    _typecode  = None

    __slots__ = ()

    #array implements __new__ rather than __init__
    def __new__( cls, *args, **kwargs ):
        return _array_new( cls, cls._typecode, *args, **kwargs )

    __eq__, __ne__ = _makeEquality( array )
    __hash__ = None

    def __repr__( self ):
        if len( self ) > 0:
            return "{}({})".format( self.__class__.__name__, self.tolist() )
        else:
            return "{}()".format( self.__class__.__name__ )

class TAG_Int_Array( _BaseArrayTag ):
    """
    Represents a TAG_Int_Array.
    TAG_Int_Array is a signed 4-byte int array subclass and generally works the same way and in the same places any other sequence (tuple, list, array etc) would.

    A TAG_Int_Array may not contain more than 2147483647 integers (8 GiB).
    Because this is an array of signed 4-byte integers, its values are limited to a signed 4-byte integer's range: [-2147483648, 2147483647].
    """
    tagType    = TAG_INT_ARRAY
    isIntArray = True
    _typecode  = SIGNED_INT_TYPE

    __slots__ = ()

class TAG_Long_Array( _BaseArrayTag ):
    """
    Represents a TAG_Long_Array.
    Works like TAG_Int_Array, but stores signed 8-byte integers: [-9223372036854775808, 9223372036854775807].
    """
    tagType     = TAG_LONG_ARRAY
    isLongArray = True
    _typecode   = SIGNED_LONG_TYPE

    __slots__ = ()

class TAG_List( list, _BaseTag ):
    """
    Represents a TAG_List.
    TAG_List is a list subclass and generally works the same way and in the same places as a list would.

    Every tag in a TAG_List has the same tagType, stored in listTagType.
    An empty TAG_List has a listTagType of TAG_END unless one was given to the constructor;
    a TAG_END list adopts the type of the first tag added to it. After that, its type is fixed.
    Adding a tag of another type raises WrongTagError; tags are never converted to a different kind of tag.

    A TAG_List may not contain more than 2147483647 entries.
    """
    tagType    = TAG_LIST
    isList     = True
    isSequence = True

    __slots__ = "listTagType"

    def __init__( self, iterable=(), listTagType=None ):
        """
        TAG_List constructor.
        Initializes a new TAG_List, optionally with a given iterable.

        iterable is an optional parameter that determines the initial contents of the list. Defaults to an empty tuple.
            Like the name suggests, if given it should be something that can be iterated over (e.g. list, tuple, generator, etc).
            iterable's values can be tags (e.g. TAG_String( "Example" ) ) or non-tag values that can be converted to tags (e.g. "Example").
        listTagType is an optional parameter specifying the type of tags stored by this list.
            This can be None (the default), a tag class, or a numeric tag type.
            If this is None, the list's tagType is deduced by inspecting the first value of the iterable (if any).
            Typically this parameter is only needed in cases where you're making lists of int/float based tags:
                xnbt.TAG_Byte
                xnbt.TAG_Short
                xnbt.TAG_Int
                xnbt.TAG_Long
                xnbt.TAG_Float
                xnbt.TAG_Double

        Examples:
            #List of strings
            ls = xnbt.TAG_List( ( "Check", "out", "these", "strings!" ) )

            #Numbers 0-9 as a list of TAG_Int
            ls = xnbt.TAG_List( range(10), xnbt.TAG_Int )

            #List of coordinates as TAG_Double
            ls = xnbt.TAG_List( ( 100.21, 60, -500.852 ), xnbt.TAG_Double )
        """
        _list_init( self )
        self.listTagType = TAG_END if listTagType is None else getattr( listTagType, "tagType", listTagType )
        self.__iadd__( iterable )

    byte      = _makeTagAppender( "byte",      TAG_Byte       )
    short     = _makeTagAppender( "short",     TAG_Short      )
    int       = _makeTagAppender( "int",       TAG_Int        )
    long      = _makeTagAppender( "long",      TAG_Long       )
    float     = _makeTagAppender( "float",     TAG_Float      )
    double    = _makeTagAppender( "double",    TAG_Double     )
    bytearray = _makeTagAppender( "bytearray", TAG_Byte_Array )
    string    = _makeTagAppender( "string",    TAG_String     )
    #list     = (outside of class)
    #compound = (outside of class)
    intarray  = _makeTagAppender( "intarray",  TAG_Int_Array  )
    longarray = _makeTagAppender( "longarray", TAG_Long_Array )

    def __eq__( self, other ):
        t = getattr( other, "tagType", None )
        if t is not None and t != TAG_LIST:
            return False
        return list.__eq__( self, other )

    def __ne__( self, other ):
        r = self.__eq__( other )
        return r if r is NotImplemented else not r

    __hash__ = None

    def __iadd__( self, values ):
        _list_iadd( self, self._aa( values ) )
        return self

    def __setitem__( self, key, value ):
        """
        Handle self[key] = value.

        If key is an int, value should be a single value. For example:
            list[0] = xnbt.TAG_String( "Example" )
            list[1] = "Another Example"
        If key is a slice, value should be an iterable (list, tuple, generator, etc) of values. For example:
            list[:]   = ( TAG_Int(5), 6, 7, 8 )
            list[2:4] = ()

        Values must be tags of the list's type, or non-tag values that can be converted to it.
        """
        if isinstance( key, slice ):
            _list_setitem( self, key, self._aa( value ) )
        else:
            _list_setitem( self, key, self._a( value ) )

    def __repr__( self ):
        if len( self ) > 0:
            return "TAG_List({})".format( _list_repr( self ) )
        else:
            return "TAG_List()"

    def append( self, value ):
        _list_append( self, self._a( value ) )

    def copy( self ):
        l = TAG_List( listTagType=self.listTagType )
        _list_iadd( l, self )
        return l

    def extend( self, iterable ):
        self.__iadd__( iterable )

    def insert( self, index, value ):
        _list_insert( self, index, self._a( value ) )

    #Called by append(), insert() and __setitem__().
    #Sets the list tagType if the list doesn't have one yet and/or converts the value to a TAG_* of the appropriate type if necessary.
    #Returns the (possibly converted) value.
    def _a( self, value ):
        ltt = self.listTagType
        if ltt != TAG_END:
            return _convert( value, ltt )

        t = getattr( value, "tagType", None )
        #value isn't a tag
        if t is None:
            c = _mapped( value )
            #No mapped conversion for this type
            if c is None:
                raise ConversionError( value )
            value = c( value )
            t = c.tagType
        elif t == TAG_END:
            raise UnexpectedEndTagError()
        self.listTagType = t
        return value

    #Converts every value in the given iterable with _a().
    #If a conversion fails, the list tagType is left as it was.
    def _aa( self, values ):
        ltt = self.listTagType
        try:
            return [ self._a( v ) for v in values ]
        except Exception:
            self.listTagType = ltt
            raise

class TAG_Compound( OrderedDict, _BaseTag ):
    """
    Represents a TAG_Compound.
    TAG_Compound is an OrderedDict subclass and generally works the same way and in the same places any other mapping (dict, etc.) would, with one major exception:
    The keys and values of a TAG_Compound are restricted to str and TAG_* objects (e.g. TAG_Byte, TAG_Compound, etc) respectively.

    Assigning to an existing key replaces its tag but keeps its position.

    A TAG_Compound can be initialized in the same ways a normal dict / OrderedDict can:
        * TAG_Compound( { k: v, ... } ):  From another mapping (e.g. dict, OrderedDict, etc).
        * TAG_Compound( [ (k,v), ... ] ): With an iterable of pairs (where pair = an iterable containing a key and value, in that order)
        * TAG_Compound( name=v, ... ):    With keyword arguments. Can be combined with either of the previous two choices.
    Note: Both k and name are used as keys in the resulting map, but the difference is that k is an expression, while name is a string literal.
    """
    tagType = TAG_COMPOUND
    isCompound = True

    __slots__ = ()

    def __setitem__( self, key, value ):
        """
        Handle self[key] = value.

        Note: Consider using the tag setter methods instead. They're unambiguous and often more compact. For example:
            comp.string( "str", "Example!" )
            comp.byte( "byte", 5 )

        key must be a str. If it isn't, TypeError is raised.

        value can be a tag or a non-tag.
        If a non-tag is provided, it is converted to a tag according to the following rules:
            If the value's Python type maps to a tag class (e.g. str -> TAG_String), it is converted to that class.
            Otherwise, if a tag with the given name already exists, value is converted to the existing tag's type.
            If both of these attempts fail, a ConversionError is raised.
        If a conversion is performed, the tag constructor may raise an exception.

        Examples:
            comp["str"]  = xnbt.TAG_String( "Example!" )
            comp["byte"] = xnbt.TAG_Byte( 5 )

            comp["str"] = "Another example!"
            comp["byte"] = -5
        """
        #Ensure key is a str and value is a tag
        if not isinstance( key, str ):
            raise TypeError( "Attempted to set a non-str key on TAG_Compound." )

        #If value is a non tag, attempt to convert it to a tag.
        if not hasattr( value, "tagType" ):
            c = _mapped( value )
            if c is not None:
                value = c( value )
            else:
                temp = self.get( key )
                if temp is None:
                    raise ConversionError( value )
                value = _convert( value, temp.tagType )
        elif value.tagType == TAG_END:
            raise UnexpectedEndTagError()

        _od_setitem( self, key, value )

    def __eq__( self, other ):
        t = getattr( other, "tagType", None )
        if t is not None and t != TAG_COMPOUND:
            return False
        return OrderedDict.__eq__( self, other )

    def __ne__( self, other ):
        r = self.__eq__( other )
        return r if r is NotImplemented else not r

    __hash__ = None

    #Note: No __repr__ override necessary, OrderedDict inserts the correct classname for us

    byte      = _makeTagSetter( "byte",      TAG_Byte       )
    short     = _makeTagSetter( "short",     TAG_Short      )
    int       = _makeTagSetter( "int",       TAG_Int        )
    long      = _makeTagSetter( "long",      TAG_Long       )
    float     = _makeTagSetter( "float",     TAG_Float      )
    double    = _makeTagSetter( "double",    TAG_Double     )
    bytearray = _makeTagSetter( "bytearray", TAG_Byte_Array )
    string    = _makeTagSetter( "string",    TAG_String     )
    list      = _makeTagSetter( "list",      TAG_List       )
    #compound = (outside of class)
    intarray  = _makeTagSetter( "intarray",  TAG_Int_Array  )
    longarray = _makeTagSetter( "longarray", TAG_Long_Array )

    def copy( self ):
        return TAG_Compound( self )

class NBTDocument( TAG_Compound ):
    """
    Represents an NBT document.

    An NBTDocument is a named TAG_Compound that serves as the root tag of the NBT tree.
    Although NBTDocuments can be named, more often than not the name is simply the empty string, "".
    """
    __slots__ = ()

    def __init__( self, *args, **kwargs ):
        """
        NBTDocument()             -> new empty NBTDocument with name ""
        NBTDocument(name)         -> new empty NBTDocument with the given name
        NBTDocument(<init>)       -> new NBTDocument with name "", initialized with the given initializers
        NBTDocument(name, <init>) -> new NBTDocument with the given name, initialized with the given initializers

        NBTDocument constructor.

        name is expected to be a str.
        <init> is a single positional argument and/or several named arguments that determine the NBTDocument's initial contents.
        See help( xnbt.TAG_Compound ) for more information on valid initializers.
        """
        l = len( args )
        if l == 0:
            self.name = ""
            super().__init__( **kwargs )
        elif l == 2:
            self.name = args[0]
            super().__init__( args[1], **kwargs )
        elif l == 1:
            arg = args[0]
            if isinstance( arg, str ):
                self.name = arg
                super().__init__( **kwargs )
            else:
                self.name = ""
                super().__init__( arg, **kwargs )
        else:
            raise TypeError( "__init__() takes at most 2 positional arguments but {:d} were given".format( l ) )

    #The root name only takes part in comparisons between two NBTDocuments.
    def __eq__( self, other ):
        if isinstance( other, NBTDocument ) and other.name != self.name:
            return False
        return TAG_Compound.__eq__( self, other )

    def __ne__( self, other ):
        r = self.__eq__( other )
        return r if r is NotImplemented else not r

    __hash__ = None

    def copy( self ):
        return NBTDocument( self.name, self )

    def __repr__( self ):
        parts = []
        name, other = self.name, super().__repr__()[12:-1]
        if len( name ) > 0:
            parts.append( "'{}'".format( name ) )
        if len( other ) > 0:
            parts.append( other )
        return "NBTDocument({})".format( ", ".join( parts ) )

#Note: Have to set create these methods here because the target classes don't exist until this point:
TAG_List.list                    = _makeTagAppender( "list",     TAG_List     )
TAG_List.compound                = _makeTagAppender( "compound", TAG_Compound )
TAG_Compound.compound            = _makeTagSetter(   "compound", TAG_Compound )

#Built-in tag classes indexed by tagType.
#Do _TAGCLASS[tagType] to get the class for the tag with that tagType.
_TAGCLASS = {
    TAG_BYTE:       TAG_Byte,
    TAG_SHORT:      TAG_Short,
    TAG_INT:        TAG_Int,
    TAG_LONG:       TAG_Long,
    TAG_FLOAT:      TAG_Float,
    TAG_DOUBLE:     TAG_Double,
    TAG_BYTE_ARRAY: TAG_Byte_Array,
    TAG_STRING:     TAG_String,
    TAG_LIST:       TAG_List,
    TAG_COMPOUND:   TAG_Compound,
    TAG_INT_ARRAY:  TAG_Int_Array,
    TAG_LONG_ARRAY: TAG_Long_Array
}

#Mapping of python types -> tag classes.
#NBT doesn't have a boolean type. Instead, a TAG_Byte with a value of 0 for False and 1 for True is usually used instead.
#Therefore, we map the python bool type to TAG_Byte.
#Tag type deduction is not possible for the int and float python types because it would be ambiguous;
#int could be deduced as TAG_Byte, TAG_Short, TAG_Int, or TAG_Long,
#and float could be deduced as TAG_Float or TAG_Double.
_TAGMAP = {
    bool:        TAG_Byte,
    bytes:       TAG_Byte_Array,
    bytearray:   TAG_Byte_Array,
    memoryview:  TAG_Byte_Array,
    str:         TAG_String,
    list:        TAG_List,
    tuple:       TAG_List,
    dict:        TAG_Compound,
    OrderedDict: TAG_Compound
}

#array.array is mapped by typecode instead.
_ARRAYMAP = {
    SIGNED_INT_TYPE:  TAG_Int_Array,
    SIGNED_LONG_TYPE: TAG_Long_Array
}

def tagClass( tagType ):
    """Returns the built-in tag class for the given tagType, or None if tagType isn't a built-in payload type."""
    return _TAGCLASS.get( tagType )
