"""
SNBT (stringified NBT) support.

SNBTRenderer converts a tag tree to text and SNBTParser converts text back into tags.
Like the binary codec, both look up the behavior of each tagType in a TypeRegistry:
the render*() functions below render the built-in tag types, and the *FromValues() functions build
the built-in typed arrays ([B;...], [I;...] and [L;...]) from their parsed elements.

Examples of SNBT:
    {name:"Steve",Health:20.0f,Pos:[0.5d,64.0d,-12.25d],Inventory:[{id:"stone",Count:1b}]}
    [I;1,2,3]
"""
import re
import math

from collections import OrderedDict

from xnbt.shared import (
    NBTFormatError, WrongTagError, ConversionError, OutOfBoundsError,
    UnexpectedTokenError, UnterminatedStringError, InvalidNumberError,
    TAG_END, TAG_INT, TAG_LIST, TAG_COMPOUND,
    DEFAULT_MAX_DEPTH,
    checkDepth, describeTag
)
from xnbt.tag import (
    TAG_Byte, TAG_Short, TAG_Int, TAG_Long, TAG_Float, TAG_Double, TAG_Byte_Array, TAG_String, TAG_List, TAG_Compound, TAG_Int_Array, TAG_Long_Array,
    _toFloat32
)

_float_repr  = float.__repr__
_list_append = list.append
_od_setitem  = OrderedDict.__setitem__

#Keys and strings made entirely of these characters don't need to be quoted.
_UNQUOTED = re.compile( r"[A-Za-z0-9._+-]+" )

#Numeric literals. Group 1 is the type suffix, if any.
_NUMBER = re.compile( r"[-+]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:e[-+]?[0-9]+)?([bslfd])?", re.IGNORECASE )

#Tag classes for integral literals, indexed by suffix.
_INTEGRAL = {
    "":  TAG_Int,
    "b": TAG_Byte,
    "s": TAG_Short,
    "l": TAG_Long
}

_QUOTES = "\"'"

class SNBTConfig:
    """
    Rendering switches for SNBTRenderer.

    pretty is an optional parameter. If True, compounds (and lists of containers) are broken across several indented lines. Defaults to False.
    indent is an optional parameter that determines the string used for one level of indentation in pretty mode. Defaults to four spaces.
    quoteKeys is an optional parameter. If True, every compound key is quoted, even if it doesn't need to be. Defaults to False.
    """
    def __init__( self, pretty=False, indent="    ", quoteKeys=False ):
        self.pretty    = pretty
        self.indent    = indent
        self.quoteKeys = quoteKeys

    def __repr__( self ):
        return "SNBTConfig(pretty={!r}, indent={!r}, quoteKeys={!r})".format( self.pretty, self.indent, self.quoteKeys )

def quote( s ):
    """Returns s as a double-quoted SNBT string. Backslashes and double quotes are escaped."""
    return "\"" + s.replace( "\\", "\\\\" ).replace( "\"", "\\\"" ) + "\""

class SNBTRenderer:
    """
    Converts tags to SNBT.

    registry is the TypeRegistry used to look up the renderer of each tagType.
    config is an optional SNBTConfig. If None, the default configuration (compact, minimal quoting) is used.
    maxDepth is the maximum nesting depth of TAG_Compounds and TAG_Lists; the outermost tag is at depth 0.
    """
    def __init__( self, registry, config=None, maxDepth=DEFAULT_MAX_DEPTH ):
        self.registry = registry
        self.config   = SNBTConfig() if config is None else config
        self.maxDepth = maxDepth

    def render( self, tag, depth=0 ):
        """Returns the SNBT for tag, a tag at the given depth."""
        t = getattr( tag, "tagType", None )
        if t is None:
            raise ConversionError( tag )
        return self.registry.resolve( t ).render( self, tag, depth )

    def key( self, name ):
        """Returns the SNBT for a compound key, quoting it if necessary or if the quoteKeys option is set."""
        if not self.config.quoteKeys and _UNQUOTED.fullmatch( name ):
            return name
        return quote( name )

    def inline( self, start, items, end ):
        """Joins rendered items on a single line. Used for arrays and lists of non-containers."""
        return start + ( ", " if self.config.pretty else "," ).join( items ) + end

    def block( self, start, items, end, depth ):
        """Joins the rendered items of a container at the given depth, one item per line in pretty mode."""
        if not self.config.pretty or len( items ) == 0:
            return start + ",".join( items ) + end
        indent = self.config.indent
        inner = "\n" + indent * ( depth + 1 )
        return start + inner + ( "," + inner ).join( items ) + "\n" + indent * depth + end

#Returns the shortest decimal string that reads back as the binary32 value v.
def _float32String( v ):
    for p in range( 1, 10 ):
        s = "%.*g" % ( p, v )
        if _toFloat32( float( s ) ) == v:
            return s
    return repr( v )

def _checkFinite( tag ):
    if not math.isfinite( tag ):
        raise NBTFormatError( "{} can't be represented in SNBT.".format( repr( tag ) ) )

def renderByte( r, tag, depth ):
    return "{:d}b".format( tag )

def renderShort( r, tag, depth ):
    return "{:d}s".format( tag )

def renderInt( r, tag, depth ):
    return "{:d}".format( tag )

def renderLong( r, tag, depth ):
    return "{:d}l".format( tag )

def renderFloat( r, tag, depth ):
    _checkFinite( tag )
    return _float32String( tag ) + "f"

def renderDouble( r, tag, depth ):
    _checkFinite( tag )
    return _float_repr( tag )

def renderByteArray( r, tag, depth ):
    #Bytes are stored unsigned but shown signed
    return r.inline( "[B;", [ "{:d}b".format( b - 256 if b > 127 else b ) for b in tag ], "]" )

def renderString( r, tag, depth ):
    return quote( tag )

def renderIntArray( r, tag, depth ):
    return r.inline( "[I;", [ "{:d}".format( i ) for i in tag ], "]" )

def renderLongArray( r, tag, depth ):
    return r.inline( "[L;", [ "{:d}l".format( i ) for i in tag ], "]" )

def renderList( r, tag, depth ):
    checkDepth( depth, r.maxDepth )
    resolve = r.registry.resolve
    depth1 = depth + 1
    items = []
    for t in tag:
        items.append( resolve( t.tagType ).render( r, t, depth1 ) )

    if tag.listTagType == TAG_LIST or tag.listTagType == TAG_COMPOUND:
        return r.block( "[", items, "]", depth )
    return r.inline( "[", items, "]" )

def renderCompound( r, tag, depth ):
    checkDepth( depth, r.maxDepth )
    resolve = r.registry.resolve
    key = r.key
    sep = ": " if r.config.pretty else ":"
    depth1 = depth + 1
    items = []
    for name, t in tag.items():
        items.append( key( name ) + sep + resolve( t.tagType ).render( r, t, depth1 ) )
    return r.block( "{", items, "}", depth )

#Converts the parsed elements of a typed array to ints of the given integral tag class.
#Elements must have been written with that class's suffix, or with no suffix at all (which parses as a TAG_Int).
def _elements( values, cls ):
    out = []
    for v in values:
        t = v.tagType
        if t != cls.tagType and t != TAG_INT:
            raise WrongTagError( cls.tagType, t )
        out.append( int( cls( v ) ) )
    return out

def byteArrayFromValues( values ):
    return TAG_Byte_Array( b & 0xFF for b in _elements( values, TAG_Byte ) )

def intArrayFromValues( values ):
    return TAG_Int_Array( _elements( values, TAG_Int ) )

def longArrayFromValues( values ):
    return TAG_Long_Array( _elements( values, TAG_Long ) )

class SNBTParser:
    """
    Recursive descent parser for SNBT.

    text is the str to parse.
    registry is the TypeRegistry used to look up typed array prefixes (e.g. the B in [B;1b,2b]).
    maxDepth is the maximum nesting depth of TAG_Compounds and TAG_Lists; the outermost tag is at depth 0.

    Whitespace between tokens is ignored. Errors are reported as subclasses of SNBTSyntaxError
    carrying the position, line and column of the offending character.
    """
    def __init__( self, text, registry, maxDepth=DEFAULT_MAX_DEPTH ):
        self.text     = text
        self.pos      = 0
        self.registry = registry
        self.maxDepth = maxDepth

    def parse( self ):
        """Parses the entire text as a single tag and returns it."""
        self._skip()
        tag = self._dispatch()( 0 )
        self._skip()
        if self.pos < len( self.text ):
            raise self._unexpected( "end of input" )
        return tag

    #Returns the method that parses the value starting at the current position.
    #Containers call the returned method themselves so each nesting level costs a single stack frame.
    def _dispatch( self ):
        c = self._peek()
        if c == "{":
            return self._compound
        if c == "[":
            text, p = self.text, self.pos
            if p + 2 < len( text ) and text[p+2] == ";" and text[p+1] not in _QUOTES:
                return self._array
            return self._list
        return self._literal

    def _peek( self ):
        p = self.pos
        return self.text[p] if p < len( self.text ) else ""

    def _skip( self ):
        text, p, n = self.text, self.pos, len( self.text )
        while p < n and text[p].isspace():
            p += 1
        self.pos = p

    def _expect( self, c ):
        if self._peek() != c:
            raise self._unexpected( repr( c ) )
        self.pos += 1

    def _unexpected( self, expected, position=None ):
        c = self._peek()
        found = "end of input" if c == "" else repr( c )
        return UnexpectedTokenError(
            "Expected {}, found {}".format( expected, found ),
            self.text,
            self.pos if position is None else position
        )

    def _compound( self, depth ):
        checkDepth( depth, self.maxDepth )
        self.pos += 1
        tag = TAG_Compound()
        self._skip()
        if self._peek() == "}":
            self.pos += 1
            return tag

        depth1 = depth + 1
        while True:
            self._skip()
            key = self._key()
            self._skip()
            self._expect( ":" )
            self._skip()
            _od_setitem( tag, key, self._dispatch()( depth1 ) )
            self._skip()
            c = self._peek()
            if c == ",":
                self.pos += 1
            elif c == "}":
                self.pos += 1
                return tag
            else:
                raise self._unexpected( "',' or '}'" )

    def _list( self, depth ):
        checkDepth( depth, self.maxDepth )
        self.pos += 1
        tag = TAG_List()
        self._skip()
        if self._peek() == "]":
            self.pos += 1
            return tag

        depth1 = depth + 1
        while True:
            self._skip()
            start = self.pos
            v = self._dispatch()( depth1 )
            ltt = tag.listTagType
            if ltt != TAG_END and v.tagType != ltt:
                raise UnexpectedTokenError(
                    "Mixed types in list: expected {}, found {}".format( describeTag( ltt ), describeTag( v.tagType ) ),
                    self.text,
                    start
                )
            _list_append( tag, v )
            tag.listTagType = v.tagType
            self._skip()
            c = self._peek()
            if c == ",":
                self.pos += 1
            elif c == "]":
                self.pos += 1
                return tag
            else:
                raise self._unexpected( "',' or ']'" )

    def _array( self, depth ):
        start = self.pos
        letter = self.text[start+1]
        behavior = self.registry.byPrefix( letter )
        if behavior is None or behavior.fromValues is None:
            raise UnexpectedTokenError( "Unknown array type {!r}".format( letter ), self.text, start + 1 )
        self.pos = start + 3

        values = []
        self._skip()
        if self._peek() == "]":
            self.pos += 1
        else:
            while True:
                self._skip()
                values.append( self._literal( depth ) )
                self._skip()
                c = self._peek()
                if c == ",":
                    self.pos += 1
                elif c == "]":
                    self.pos += 1
                    break
                else:
                    raise self._unexpected( "',' or ']'" )

        try:
            return behavior.fromValues( values )
        except OutOfBoundsError as e:
            raise InvalidNumberError( "Invalid element in [{};] array: {}".format( letter, e ), self.text, start ) from e
        except ( WrongTagError, ConversionError ) as e:
            raise UnexpectedTokenError( "Invalid element in [{};] array: {}".format( letter, e ), self.text, start ) from e

    def _key( self ):
        c = self._peek()
        if c != "" and c in _QUOTES:
            return self._quoted()
        m = _UNQUOTED.match( self.text, self.pos )
        if m is None:
            raise self._unexpected( "a key" )
        self.pos = m.end()
        return m.group()

    def _quoted( self ):
        text = self.text
        start = self.pos
        q = text[start]
        n = len( text )
        parts = []
        i = start + 1
        while i < n:
            c = text[i]
            if c == q:
                self.pos = i + 1
                return "".join( parts )
            if c == "\\":
                i += 1
                if i >= n:
                    break
                c = text[i]
                if c not in "\\\"'":
                    raise UnexpectedTokenError( "Invalid escape sequence \\{}".format( c ), text, i - 1 )
            parts.append( c )
            i += 1
        raise UnterminatedStringError( "Unterminated string", text, start )

    def _literal( self, depth ):
        c = self._peek()
        if c != "" and c in _QUOTES:
            return TAG_String( self._quoted() )
        start = self.pos
        m = _UNQUOTED.match( self.text, start )
        if m is None:
            raise self._unexpected( "a value" )
        self.pos = m.end()
        return self._token( m.group(), start )

    #Converts an unquoted token to a tag: a number, a boolean (as a TAG_Byte), or a TAG_String.
    def _token( self, token, start ):
        m = _NUMBER.fullmatch( token )
        if m is None:
            if token == "true":
                return TAG_Byte( 1 )
            if token == "false":
                return TAG_Byte( 0 )
            return TAG_String( token )

        suffix = m.group( 1 )
        if suffix is None:
            number, suffix = token, ""
        else:
            number, suffix = token[:-1], suffix.lower()
        integral = "." not in number and "e" not in number.lower()

        cls = _INTEGRAL.get( suffix )
        if cls is not None:
            if not integral:
                if suffix != "":
                    raise InvalidNumberError( "Expected an integer before suffix in {!r}".format( token ), self.text, start )
                return self._real( TAG_Double, number, token, start )
            try:
                return cls( int( number ) )
            except OutOfBoundsError as e:
                raise InvalidNumberError( "{!r} is out of range for {}".format( token, cls.__name__ ), self.text, start ) from e

        return self._real( TAG_Float if suffix == "f" else TAG_Double, number, token, start )

    def _real( self, cls, number, token, start ):
        tag = cls( float( number ) )
        if math.isinf( tag ):
            raise InvalidNumberError( "{!r} is out of range for {}".format( token, cls.__name__ ), self.text, start )
        return tag
