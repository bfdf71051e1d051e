"""Well-known descriptor keys and values shared by the markup converter and modules."""

# Object descriptor nodes
NODES = {
    "type": "_type",
    "children": "_children",
    "parent_element": "_parent_element",
}

TYPE_KEY = NODES["type"]
CHILDREN_KEY = NODES["children"]
ID_KEY = "_id"
TEXT_KEY = "text"

# Pass-through markup variant and its carrier attributes
RAW_MARKUP_TYPE = "xhtml"
VECTOR_CONTAINER_TYPE = "svg"
HTML_TAG_KEY = "_html_tag"
HTML_NS_KEY = "_html_ns"
SVG_NAMESPACE = "http://www.w3.org/2000/svg"

# Node names starting with this marker are pseudo nodes (comments, text)
PSEUDO_NODE_MARKER = "#"
