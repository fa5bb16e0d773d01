#!/usr/bin/env python3
# -*- coding: utf-8 -*-

# Copyright 2025 Emasoft
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
Shared constants for the EPUB modules: archive layout, media types,
compression settings and the builtin stylesheet.
"""

import re

# Constants
MIMETYPE = "application/epub+zip"
GENERATOR_NAME = "ebook-generator"

# Archive layout
META_INF_FOLDER = "META-INF"
OEBPF_FOLDER = "OEBPF"
CSS_FOLDER = f"{OEBPF_FOLDER}/css"
CONTENT_FOLDER = f"{OEBPF_FOLDER}/content"
IMAGES_FOLDER = f"{OEBPF_FOLDER}/images"

CONTAINER_FILE = "container.xml"
OPF_FILE = "ebook.opf"
NCX_FILE = "navigation.ncx"
COVER_FILE = "cover.xhtml"
CSS_FILE = "ebook.css"
TOC_FILE = "toc.xhtml"
SECTION_SUFFIX = ".xhtml"

# Every entry except the mimetype is deflated at this level
COMPRESSION_LEVEL = 4

# Metadata defaults
DEFAULT_LANGUAGE = "en"
DEFAULT_CONTENTS_TITLE = "Chapters"
DEFAULT_PUBLISHER = "Anonymous"
REQUIRED_FIELDS = ("id", "title", "author", "cover")

# Wire format of the dcterms:modified timestamp
MODIFIED_FORMAT = "%Y-%m-%dT%H:%M:%SZ"

IMAGE_EXTENSIONS = {
    "image/svg+xml": ".svg",
    "image/png": ".png",
    "image/jpeg": ".jpg",
    "image/gif": ".gif",
    "image/tiff": ".tiff",
}

RTL_LANGUAGES = {
    "ar": "Arabic",
    "arc": "Aramaic",
    "dv": "Divehi",
    "fa": "Persian",
    "ha": "Hausa",
    "he": "Hebrew",
    "khw": "Khowar",
    "ks": "Kashmiri",
    "ku": "Kurdish",
    "ps": "Pashto",
    "ur": "Urdu",
    "yi": "Yiddish",
}

# Regex patterns
DATA_URI_RE = re.compile(
    r"^\s*data:([a-z]+/[a-z0-9.+\-]+(;[a-z\-]+=[a-z0-9\-]+)?)?(;base64)?,[a-z0-9!$&',()*+;=\-._~:@/?%\s]*\s*$",
    re.IGNORECASE,
)
TOKEN_RE = re.compile(r"\[\[([A-Z]+)\]\]")

BASE_CSS = (
    "@page{margin:10px}"
    "a,abbr,acronym,address,applet,article,aside,audio,b,big,blockquote,body,canvas,caption,center,cite,code,"
    "del,details,dfn,div,em,embed,fieldset,figcaption,figure,footer,form,h1,h2,h3,h4,h5,h6,header,hgroup,html,"
    "i,iframe,img,ins,kbd,label,legend,mark,menu,nav,object,output,p,pre,q,ruby,s,samp,section,small,span,"
    "strike,strong,sub,summary,sup,table,tbody,td,tfoot,th,thead,time,tr,tt,u,var,video"
    "{margin:0;padding:0;border:0;font-size:100%;vertical-align:baseline}"
    "table{border-collapse:collapse;border-spacing:0}"
    "dd,dl,dt,li,ol,ul{margin:0;padding:0;border:0;font-size:100%;vertical-align:baseline}"
    "body{text-align:justify;line-height:120%}"
    "h1{text-indent:0;text-align:center;margin:100px 0 0 0;font-size:2em;font-weight:700;"
    "page-break-before:always;line-height:150%}"
    "h2{text-indent:0;text-align:center;margin:50px 0 0 0;font-size:1.5em;font-weight:700;"
    "page-break-before:always;line-height:135%}"
    "h3{text-indent:0;text-align:left;font-size:1.4em;font-weight:700}"
    "h4{text-indent:0;text-align:left;font-size:1.2em;font-weight:700}"
    "h5{text-indent:0;text-align:left;font-size:1.1em;font-weight:700}"
    "h6{text-indent:0;text-align:left;font-size:1em;font-weight:700}"
    "h1,h2,h3,h4,h5,h6{-webkit-hyphens:none!important;hyphens:none;page-break-after:avoid;page-break-inside:avoid}"
    "p{text-indent:1.25em;margin:0;widows:2;orphans:2}"
    "p.centered{text-indent:0;margin:1em 0 0 0;text-align:center}"
    "ul{margin:1em 0 0 2em;text-align:left}"
    "ol{margin:1em 0 0 2em;text-align:left}"
    "img{max-width:100%}"
    "table{margin:1em auto}"
    "td,th,tr{margin:0;padding:2px;border:1px solid #000;font-size:100%;vertical-align:baseline}"
    ".footnote{vertical-align:super;font-size:.75em;text-decoration:none}"
    "div.blockquote{margin:1em 1.5em 0 1.5em;text-align:left;font-size:.9em}"
)

RTL_CSS = """body, html {
    text-align: right;
    direction: rtl;
}
"""
