"""
XNBT is a library for reading and writing Named Binary Tag (NBT) data for Python 3.
It reads and writes binary NBT (uncompressed, gzip or zlib compressed) and SNBT, the stringified form of NBT,
and supports custom tag types through type registries.
"""

#NBT Tag Types, Exceptions
from xnbt.shared import (
    TAG_END, TAG_BYTE, TAG_SHORT, TAG_INT, TAG_LONG, TAG_FLOAT, TAG_DOUBLE, TAG_BYTE_ARRAY, TAG_STRING, TAG_LIST, TAG_COMPOUND, TAG_INT_ARRAY, TAG_LONG_ARRAY,
    TAG_NAMES, TAG_COUNT, MAX_TAG_TYPE, DEFAULT_MAX_DEPTH,
    NBTFormatError, WrongTagError, ConversionError, OutOfBoundsError, UnknownTagTypeError, DuplicateTypeIdError, UnexpectedEndTagError,
    MalformedStringError, NegativeLengthError, UnexpectedEOFError, NestingTooDeepError, UnsupportedCompressionError, StreamError,
    SNBTSyntaxError, UnexpectedTokenError, UnterminatedStringError, InvalidNumberError,
    describeTag, checkDepth
)

#NBTDocument and TAG_* Classes
from xnbt.tag import NBTDocument, TAG_Byte, TAG_Short, TAG_Int, TAG_Long, TAG_Float, TAG_Double, TAG_Byte_Array, TAG_String, TAG_List, TAG_Compound, TAG_Int_Array, TAG_Long_Array, tagClass

#Type registry
from xnbt.registry import TagType, TypeRegistry

#Binary reader / writer
from xnbt.reader import NBTReader
from xnbt.writer import NBTWriter

#Compression
from xnbt.compression import COMPRESSION_NONE, COMPRESSION_GZIP, COMPRESSION_ZLIB, COMPRESSIONS

#SNBT
from xnbt.snbt import SNBTConfig, SNBTRenderer, SNBTParser

#Codec
from xnbt.nbt import NBT, read, write, toSnbt, fromSnbt


#Export everything we imported above
__all__ = [
    "TAG_END", "TAG_BYTE", "TAG_SHORT", "TAG_INT", "TAG_LONG", "TAG_FLOAT", "TAG_DOUBLE", "TAG_BYTE_ARRAY", "TAG_STRING", "TAG_LIST", "TAG_COMPOUND", "TAG_INT_ARRAY", "TAG_LONG_ARRAY",
    "TAG_NAMES", "TAG_COUNT", "MAX_TAG_TYPE", "DEFAULT_MAX_DEPTH",
    "NBTFormatError", "WrongTagError", "ConversionError", "OutOfBoundsError", "UnknownTagTypeError", "DuplicateTypeIdError", "UnexpectedEndTagError",
    "MalformedStringError", "NegativeLengthError", "UnexpectedEOFError", "NestingTooDeepError", "UnsupportedCompressionError", "StreamError",
    "SNBTSyntaxError", "UnexpectedTokenError", "UnterminatedStringError", "InvalidNumberError",
    "describeTag", "checkDepth",
    "NBTDocument", "TAG_Byte", "TAG_Short", "TAG_Int", "TAG_Long", "TAG_Float", "TAG_Double", "TAG_Byte_Array", "TAG_String", "TAG_List", "TAG_Compound", "TAG_Int_Array", "TAG_Long_Array", "tagClass",
    "TagType", "TypeRegistry",
    "NBTReader", "NBTWriter",
    "COMPRESSION_NONE", "COMPRESSION_GZIP", "COMPRESSION_ZLIB", "COMPRESSIONS",
    "SNBTConfig", "SNBTRenderer", "SNBTParser",
    "NBT", "read", "write", "toSnbt", "fromSnbt"
]
