"""
Tag type registry.

A TypeRegistry maps each one-byte tagType to a TagType, the bundle of functions that construct, read, write and render that kind of tag.
Every NBTReader, NBTWriter, SNBTRenderer and SNBTParser is given a registry, and consults it for every tag it handles.

A new registry contains the twelve built-in tag types (TAG_Byte through TAG_Long_Array).
Custom tag types can be registered with ids from 13 to 255:

    class Point( tuple ):
        tagType = 13
        ...

    registry = xnbt.TypeRegistry()
    registry.register( 13, xnbt.TagType(
        "Point", Point,
        read   = lambda r, depth:      Point( ( r.int(), r.int() ) ),
        write  = lambda w, tag, depth: ( w.int( tag[0] ), w.int( tag[1] ) ),
        render = lambda r, tag, depth: "[P;{:d},{:d}]".format( *tag ),
        prefix = "P",
        fromValues = lambda values: Point( int( v ) for v in values )
    ) )
"""
import logging

from collections import namedtuple

from xnbt.shared import (
    DuplicateTypeIdError, UnknownTagTypeError,
    TAG_END, TAG_BYTE, TAG_SHORT, TAG_INT, TAG_LONG, TAG_FLOAT, TAG_DOUBLE, TAG_BYTE_ARRAY, TAG_STRING, TAG_LIST, TAG_COMPOUND, TAG_INT_ARRAY, TAG_LONG_ARRAY,
    MAX_TAG_TYPE,
    describeTag
)
from xnbt.tag import TAG_Byte, TAG_Short, TAG_Int, TAG_Long, TAG_Float, TAG_Double, TAG_Byte_Array, TAG_String, TAG_List, TAG_Compound, TAG_Int_Array, TAG_Long_Array
from xnbt import reader as _r
from xnbt import writer as _w
from xnbt import snbt as _s

log = logging.getLogger( __name__ )

TagType = namedtuple( "TagType", ( "name", "cls", "read", "write", "render", "prefix", "fromValues" ), defaults=( None, None ) )
TagType.__doc__ = \
    """
    TagType( name, cls, read, write, render, prefix=None, fromValues=None )

    The behavior of one kind of tag.
    name is the display name of the tag type, e.g. "TAG_Int".
    cls is the tag class. cls() must construct the tag's zero value, and cls.tagType must be the id the bundle is registered under.
    read( reader, depth ) reads a payload from an NBTReader and returns the tag.
    write( writer, tag, depth ) writes the payload of tag with an NBTWriter.
    render( renderer, tag, depth ) returns the SNBT for tag.
    prefix is an optional single character identifying a typed array in SNBT, e.g. "I" in [I;1,2,3].
    fromValues( values ) builds a tag from the parsed elements of such an array (a list of tags). Required if prefix is given.
    depth is the nesting depth of the tag; containers must call xnbt.checkDepth() on it and pass depth + 1 to their children.
    """

_BUILTINS = (
    ( TAG_BYTE,       TagType( "TAG_Byte",       TAG_Byte,       _r.readByte,      _w.writeByte,      _s.renderByte      ) ),
    ( TAG_SHORT,      TagType( "TAG_Short",      TAG_Short,      _r.readShort,     _w.writeShort,     _s.renderShort     ) ),
    ( TAG_INT,        TagType( "TAG_Int",        TAG_Int,        _r.readInt,       _w.writeInt,       _s.renderInt       ) ),
    ( TAG_LONG,       TagType( "TAG_Long",       TAG_Long,       _r.readLong,      _w.writeLong,      _s.renderLong      ) ),
    ( TAG_FLOAT,      TagType( "TAG_Float",      TAG_Float,      _r.readFloat,     _w.writeFloat,     _s.renderFloat     ) ),
    ( TAG_DOUBLE,     TagType( "TAG_Double",     TAG_Double,     _r.readDouble,    _w.writeDouble,    _s.renderDouble    ) ),
    ( TAG_BYTE_ARRAY, TagType( "TAG_Byte_Array", TAG_Byte_Array, _r.readByteArray, _w.writeByteArray, _s.renderByteArray, "B", _s.byteArrayFromValues ) ),
    ( TAG_STRING,     TagType( "TAG_String",     TAG_String,     _r.readString,    _w.writeString,    _s.renderString    ) ),
    ( TAG_LIST,       TagType( "TAG_List",       TAG_List,       _r.readList,      _w.writeList,      _s.renderList      ) ),
    ( TAG_COMPOUND,   TagType( "TAG_Compound",   TAG_Compound,   _r.readCompound,  _w.writeCompound,  _s.renderCompound  ) ),
    ( TAG_INT_ARRAY,  TagType( "TAG_Int_Array",  TAG_Int_Array,  _r.readIntArray,  _w.writeIntArray,  _s.renderIntArray,  "I", _s.intArrayFromValues  ) ),
    ( TAG_LONG_ARRAY, TagType( "TAG_Long_Array", TAG_Long_Array, _r.readLongArray, _w.writeLongArray, _s.renderLongArray, "L", _s.longArrayFromValues ) )
)

class TypeRegistry:
    """
    Maps tagTypes to TagType bundles.

    builtins is an optional parameter. If True (the default), the registry starts out with the built-in tag types.
    If False, it starts out empty.

    Registries are independent of each other: registering a type with one registry has no effect on any other registry.
    A registry may be shared by several codecs and threads as long as nothing is registered with it while it's in use.
    """
    def __init__( self, builtins=True ):
        self._types    = {}
        self._prefixes = {}
        if builtins:
            for tagType, behavior in _BUILTINS:
                self._add( tagType, behavior )

    def register( self, tagType, behavior ):
        """
        Registers behavior, a TagType, for the given tagType.

        Raises DuplicateTypeIdError if tagType is TAG_End or is already registered, or if behavior's SNBT prefix is already in use.
        Raises ValueError if tagType isn't in the range [0,255], if behavior.cls.tagType isn't tagType,
        or if behavior has a prefix but no fromValues function.
        """
        if not isinstance( tagType, int ) or tagType < 0 or tagType > MAX_TAG_TYPE:
            raise ValueError( "Tag types must be integers in the range [0,{:d}], got {!r}.".format( MAX_TAG_TYPE, tagType ) )
        if tagType == TAG_END or tagType in self._types:
            raise DuplicateTypeIdError( tagType )

        clsType = getattr( behavior.cls, "tagType", None )
        if clsType != tagType:
            raise ValueError( "{} has tagType {!r}, but is being registered as tag type {:d}.".format( behavior.cls.__name__, clsType, tagType ) )

        prefix = behavior.prefix
        if prefix is not None:
            if behavior.fromValues is None:
                raise ValueError( "{} has an SNBT prefix but no fromValues function.".format( behavior.name ) )
            if prefix in self._prefixes:
                raise DuplicateTypeIdError( "{} (prefix {!r})".format( tagType, prefix ) )

        self._add( tagType, behavior )
        log.debug( "Registered %s as tag type %d", behavior.name, tagType )

    def _add( self, tagType, behavior ):
        self._types[tagType] = behavior
        if behavior.prefix is not None:
            self._prefixes[behavior.prefix] = behavior

    def resolve( self, tagType ):
        """Returns the TagType registered for tagType. Raises UnknownTagTypeError if there isn't one."""
        try:
            return self._types[tagType]
        except KeyError:
            raise UnknownTagTypeError( tagType ) from None

    def byPrefix( self, prefix ):
        """Returns the TagType with the given SNBT array prefix, or None if there isn't one."""
        return self._prefixes.get( prefix )

    def create( self, tagType, *args, **kwargs ):
        """
        Constructs a tag of the given tagType, passing the given arguments to its class.
        With no arguments, returns the zero value for that tag type (e.g. TAG_Int(0), an empty TAG_List).
        """
        return self.resolve( tagType ).cls( *args, **kwargs )

    def describe( self, tagType ):
        """Returns a short description of tagType, e.g. "TAG_Int (3)"."""
        behavior = self._types.get( tagType )
        if behavior is None:
            return describeTag( tagType )
        return "{} ({:d})".format( behavior.name, tagType )

    def copy( self ):
        """Returns a new registry with the same registrations as this one. Changes to either don't affect the other."""
        c = TypeRegistry( builtins=False )
        c._types    = dict( self._types )
        c._prefixes = dict( self._prefixes )
        return c

    def __contains__( self, tagType ):
        return tagType in self._types

    def __iter__( self ):
        """Iterates over the registered tagTypes in ascending order."""
        return iter( sorted( self._types ) )

    def __len__( self ):
        return len( self._types )

    def __repr__( self ):
        return "TypeRegistry({})".format( ", ".join( self.describe( t ) for t in self ) )
