"""
The NBT codec.

An NBT object bundles a TypeRegistry, SNBT rendering options and a maximum nesting depth,
and provides entry points for reading and writing NBT documents as streams, files, bytes, base64, SNBT and JSON.

    codec = xnbt.NBT()
    doc = codec.fromFile( "level.dat" )
    doc["Data"]["LevelName"] = "My World"
    codec.toFile( doc, "level.dat", compression="gzip" )

The module-level read(), write(), toSnbt() and fromSnbt() functions use a new NBT object with the default configuration.
"""
import os
import json
import base64
import binascii
import logging

from io import BytesIO

from xnbt.shared import NBTFormatError, StreamError, DEFAULT_MAX_DEPTH
from xnbt.registry import TypeRegistry
from xnbt.reader import NBTReader
from xnbt.writer import NBTWriter
from xnbt.compression import COMPRESSION_GZIP, checkCompression, compress, openReader
from xnbt.snbt import SNBTConfig, SNBTRenderer, SNBTParser
from xnbt.jsonconv import toJsonValue, fromJsonValue

log = logging.getLogger( __name__ )

class NBT:
    """
    NBT codec.

    registry is an optional TypeRegistry. If None, a new registry with the built-in tag types is used.
    snbtConfig is an optional SNBTConfig used by toSnbt(). If None, the default configuration is used.
    maxDepth is an optional parameter that determines the maximum nesting depth of TAG_Compounds and TAG_Lists. Defaults to 512.

    These are available as the registry, snbtConfig and maxDepth attributes.
    Changing them affects subsequent calls only.
    """
    def __init__( self, registry=None, snbtConfig=None, maxDepth=DEFAULT_MAX_DEPTH ):
        self.registry   = TypeRegistry() if registry is None else registry
        self.snbtConfig = SNBTConfig() if snbtConfig is None else snbtConfig
        self.maxDepth   = maxDepth

    def toBytes( self, compound, compression=None ):
        """
        Encodes compound, a TAG_Compound (or NBTDocument), and returns the encoded bytes.
        compression is an optional parameter that can be None, "gzip", or "zlib". Defaults to None.
        """
        checkCompression( compression )
        b = BytesIO()
        NBTWriter( b, self.registry, self.maxDepth ).writeRoot( compound )
        return compress( b.getvalue(), compression )

    def toStream( self, compound, stream, compression=None ):
        """
        Encodes compound and writes it to stream, a writable binary file-like object.
        The document is fully encoded before anything is written, so nothing is written if encoding fails.
        """
        stream.write( self.toBytes( compound, compression ) )

    def toFile( self, compound, path, compression=None ):
        """Encodes compound and writes it to the file at path, replacing its contents."""
        data = self.toBytes( compound, compression )
        with open( path, "wb" ) as file:
            file.write( data )
        log.debug( "Wrote %d bytes to %s (compression: %s)", len( data ), path, compression )

    def toBase64( self, compound, compression=None ):
        """Encodes compound and returns the encoded bytes as a base64 str."""
        return base64.b64encode( self.toBytes( compound, compression ) ).decode( "ascii" )

    def fromStream( self, stream ):
        """
        Reads an NBT document from stream, a readable binary file-like object, and returns it as an NBTDocument.
        The compression type (none, gzip or zlib) is detected automatically.
        """
        try:
            compression, readable = openReader( stream )
        except NBTFormatError as e:
            #Nothing has been decoded yet
            if e.offset is None:
                e.offset = 0
            raise
        return NBTReader( readable, self.registry, self.maxDepth ).readRoot()

    def fromFile( self, path ):
        """Reads the NBT document in the file at path and returns it as an NBTDocument."""
        log.debug( "Reading %s", path )
        with open( path, "rb" ) as file:
            return self.fromStream( file )

    def fromBytes( self, data ):
        """Decodes the NBT document in data (a bytes-like object) and returns it as an NBTDocument."""
        return self.fromStream( BytesIO( data ) )

    def fromBase64( self, text ):
        """Decodes the base64-encoded NBT document in text and returns it as an NBTDocument."""
        try:
            data = base64.b64decode( text, validate=True )
        except binascii.Error as e:
            raise StreamError( "Invalid base64 data: {}".format( e ) ) from e
        return self.fromBytes( data )

    def toSnbt( self, tag ):
        """Returns the SNBT for tag, which can be any tag."""
        return SNBTRenderer( self.registry, self.snbtConfig, self.maxDepth ).render( tag )

    def fromSnbt( self, text ):
        """Parses text as SNBT and returns the resulting tag, which can be any kind of tag."""
        return SNBTParser( text, self.registry, self.maxDepth ).parse()

    def toJson( self, compound, target=None, indent=None ):
        """
        Converts compound to JSON. The conversion is lossy; see xnbt.jsonconv.
        If target is None, returns the JSON as a str.
        Otherwise, target can be a path (str or os.PathLike) or a writable text file-like object, and the JSON is written there.
        indent is passed to json.dumps().
        """
        text = json.dumps( toJsonValue( compound, self.maxDepth ), indent=indent, ensure_ascii=False )
        if target is None:
            return text
        if isinstance( target, ( str, os.PathLike ) ):
            with open( target, "w", encoding="utf-8" ) as file:
                file.write( text )
            log.debug( "Wrote JSON to %s", target )
        else:
            target.write( text )

    def fromJson( self, source ):
        """
        Converts JSON to tags. The conversion is lossy; see xnbt.jsonconv.
        source can be a str of JSON, an os.PathLike path to a JSON file, or a readable text file-like object.
        """
        if isinstance( source, os.PathLike ):
            log.debug( "Reading JSON from %s", source )
            with open( source, "r", encoding="utf-8" ) as file:
                value = json.load( file )
        elif isinstance( source, str ):
            value = json.loads( source )
        else:
            value = json.load( source )
        return fromJsonValue( value, self.maxDepth )

def read( source ):
    """
    Reads an NBT document from source and returns it as an NBTDocument.
    source can be the path of a file or a readable binary file-like object. Compression is detected automatically.
    """
    if hasattr( source, "read" ):
        return NBT().fromStream( source )
    return NBT().fromFile( source )

def write( compound, target, compression=COMPRESSION_GZIP ):
    """
    Writes compound, a TAG_Compound or NBTDocument, to target.
    target can be the path of a file or a writable binary file-like object.
    compression is an optional parameter that can be None, "gzip", or "zlib". Defaults to "gzip".
    """
    if hasattr( target, "write" ):
        NBT().toStream( compound, target, compression )
    else:
        NBT().toFile( compound, target, compression )

def toSnbt( tag, pretty=False ):
    """Returns the SNBT for tag. If pretty is True, the output is indented."""
    return NBT( snbtConfig=SNBTConfig( pretty=pretty ) ).toSnbt( tag )

def fromSnbt( text ):
    """Parses text as SNBT and returns the resulting tag."""
    return NBT().fromSnbt( text )
