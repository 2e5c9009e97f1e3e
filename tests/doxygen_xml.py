"""Builders for the small Doxygen XML folders used by the tests."""

from html import escape
from pathlib import Path
from typing import Any

from doxyweave.xml_accessor import XmlAccessor, load_xml_string

XmlCompound = tuple[str, str, str, str]

_HEADER = '<?xml version="1.0" encoding="UTF-8" standalone="no"?>\n'


def compound(refid: str, kind: str, name: str, body: str = "") -> XmlCompound:
    """Describe one compound file: id, kind, compound name and inner XML."""
    return (refid, kind, name, body)


def memberdef(
    refid: str,
    name: str,
    kind: str = "function",
    body: str = "",
    prot: str = "public",
) -> str:
    """Return a ``<memberdef>`` with the required attributes and location."""
    return (
        f'<memberdef kind="{kind}" id="{refid}" prot="{prot}" static="no">'
        f"<name>{escape(name, quote=False)}</name>{body}"
        '<location file="widget.h" line="10"/></memberdef>'
    )


def sectiondef(kind: str, *members: str) -> str:
    """Return a ``<sectiondef>`` holding the given members."""
    return f'<sectiondef kind="{kind}">{"".join(members)}</sectiondef>'


def write_xml_folder(
    folder: Path,
    compounds: list[XmlCompound],
    doxyfile: dict[str, str] | None = None,
) -> Path:
    """Write ``index.xml``, one file per compound and an optional Doxyfile."""
    folder.mkdir(parents=True, exist_ok=True)
    entries = []
    for refid, kind, name, body in compounds:
        quoted = escape(name, quote=False)
        entries.append(
            f'<compound refid="{refid}" kind="{kind}"><name>{quoted}</name></compound>'
        )
        (folder / f"{refid}.xml").write_text(
            f'{_HEADER}<doxygen version="1.9.8" xml:lang="en-US">\n'
            f'<compounddef id="{refid}" kind="{kind}">'
            f"<compoundname>{quoted}</compoundname>{body}</compounddef>\n"
            "</doxygen>\n",
            encoding="utf-8",
        )
    (folder / "index.xml").write_text(
        f'{_HEADER}<doxygenindex version="1.9.8" xml:lang="en-US">\n'
        + "\n".join(entries)
        + "\n</doxygenindex>\n",
        encoding="utf-8",
    )
    if doxyfile is not None:
        options = "".join(
            f'<option id="{key}" default="no" type="string">'
            f"<value>{escape(value, quote=False)}</value></option>"
            for key, value in doxyfile.items()
        )
        (folder / "Doxyfile.xml").write_text(
            f'{_HEADER}<doxyfile version="1.9.8" xml:lang="en-US">'
            f"{options}</doxyfile>\n",
            encoding="utf-8",
        )
    return folder


def parse_node(node_class: type, text: str) -> Any:
    """Parse an XML snippet into a node of ``node_class``."""
    return node_class(XmlAccessor("test.xml"), load_xml_string(text))


def widget_compounds() -> list[XmlCompound]:
    """Return a namespace holding a derived class with one documented member."""
    method = memberdef(
        "classns_1_1_widget_1a3f",
        "resize",
        body=(
            "<type>void</type><definition>void ns::Widget::resize</definition>"
            "<argsstring>(int size)</argsstring>"
            "<briefdescription><para>Change the size.</para></briefdescription>"
        ),
    )
    return [
        compound(
            "namespacens",
            "namespace",
            "ns",
            '<innerclass refid="classns_1_1_base" prot="public">ns::Base</innerclass>'
            '<innerclass refid="classns_1_1_widget" prot="public">ns::Widget'
            "</innerclass>",
        ),
        compound(
            "classns_1_1_base",
            "class",
            "ns::Base",
            '<derivedcompoundref refid="classns_1_1_widget" prot="public" '
            'virt="non-virtual">ns::Widget</derivedcompoundref>'
            "<briefdescription><para>The base.</para></briefdescription>",
        ),
        compound(
            "classns_1_1_widget",
            "class",
            "ns::Widget",
            '<basecompoundref refid="classns_1_1_base" prot="public" '
            'virt="non-virtual">ns::Base</basecompoundref>'
            "<briefdescription><para>A widget.</para></briefdescription>"
            + sectiondef("public-func", method)
            + '<location file="ns/widget.h" line="4"/>',
        ),
    ]


RICH_DESCRIPTION = """<detaileddescription>
<para>Text with <bold>bold</bold>, <emphasis>em</emphasis>,
<computeroutput>code</computeroutput>, <ulink url="https://example.org">a link</ulink>,
<ref refid="classbox" kindref="compound">Box</ref>, <anchor id="classbox_1here"/>
<formula id="0">$x^2$</formula> <emoji name="smile" unicode="&amp;#x1f604;"/>
<linebreak/><copy/> <htmlonly>&lt;i&gt;raw&lt;/i&gt;</htmlonly>
<image type="html" name="pic.png" alt="Picture">Caption</image></para>
<para>
<itemizedlist><listitem><para>one</para></listitem></itemizedlist>
<orderedlist><listitem><para>first</para></listitem></orderedlist>
<simplesect kind="return"><para>Value.</para></simplesect>
<simplesect kind="note"><para>Careful.</para></simplesect>
<simplesect kind="par"><title>Extra</title><para>More.</para></simplesect>
<parameterlist kind="param"><parameteritem><parameternamelist>
<parametertype>int</parametertype><parametername direction="in">n</parametername>
</parameternamelist><parameterdescription><para>Count.</para></parameterdescription>
</parameteritem></parameterlist>
<xrefsect id="todo_1_todo000001"><xreftitle>Todo</xreftitle>
<xrefdescription><para>Finish.</para></xrefdescription></xrefsect>
<variablelist><varlistentry><term>alpha</term></varlistentry>
<listitem><para>First.</para></listitem></variablelist>
<table rows="1" cols="1"><caption>Cap</caption>
<row><entry thead="yes"><para>H</para></entry></row></table>
<heading level="2">Heading</heading>
<verbatim>raw_text</verbatim>
<preformatted>pre <bold>b</bold></preformatted>
<hruler/>
<toclist><tocitem id="classbox_1sec">Item</tocitem></toclist>
<details><summary>More</summary><para>Hidden.</para></details>
<blockquote><para>Quoted.</para></blockquote>
<parblock><para>Block.</para></parblock>
<programlisting filename=".cpp"><codeline lineno="1">
<highlight class="keyword">int</highlight><highlight class="normal"><sp/>x;</highlight>
</codeline></programlisting>
</para>
<internal><para>Internal.</para></internal>
<sect1 id="classbox_1s1"><title>Section</title><para>Body.</para>
<sect2 id="classbox_1s2"><title>Sub</title><para>Deeper.</para></sect2></sect1>
</detaileddescription>"""


def rich_compounds() -> list[XmlCompound]:
    """Return compounds of every kind using most of the description schema."""
    get = memberdef(
        "classbox_1a1",
        "get",
        body=(
            "<templateparamlist><param><type>typename U</type></param>"
            "</templateparamlist>"
            '<type><ref refid="classbox" kindref="compound">Box</ref> &amp;</type>'
            "<definition>Box &amp; Box::get</definition>"
            "<argsstring>(int n=0)</argsstring>"
            "<param><type>int</type><declname>n</declname><defval>0</defval></param>"
            "<briefdescription><para>Get it.</para></briefdescription>"
            + RICH_DESCRIPTION
            + '<reimplements refid="classbase_1a1">get</reimplements>'
            '<references refid="classbox_1a2">value</references>'
        ),
    )
    value = memberdef(
        "classbox_1a2",
        "value",
        kind="variable",
        body=(
            "<type>int</type><definition>int Box::value</definition>"
            "<argsstring></argsstring><initializer>= 3</initializer>"
        ),
    )
    color = memberdef(
        "classbox_1a3",
        "Color",
        kind="enum",
        body=(
            "<type>int</type>"
            '<enumvalue id="classbox_1a3a1" prot="public"><name>Red</name>'
            "<initializer>= 1</initializer>"
            "<briefdescription><para>Red.</para></briefdescription></enumvalue>"
        ),
    )
    define = memberdef(
        "box_8h_1a9",
        "BOX_MAX",
        kind="define",
        body="<param><defname>x</defname></param><initializer>(x)</initializer>",
    )
    return [
        compound(
            "group__core",
            "group",
            "core",
            '<title>Core</title><innerclass refid="classbox" prot="public">Box'
            "</innerclass>"
            + sectiondef(
                "func",
                '<member refid="classbox_1a1" kind="function"><name>get</name>'
                "</member>",
            ),
        ),
        compound(
            "classbox",
            "class",
            "Box",
            '<basecompoundref prot="public" virt="non-virtual">std::vector&lt;T&gt;'
            "</basecompoundref>"
            '<includes local="no">box.h</includes>'
            "<templateparamlist><param><type>typename T</type></param>"
            "</templateparamlist>"
            + sectiondef("public-func", get)
            + sectiondef("public-attrib", value)
            + '<sectiondef kind="user-defined"><header>Colors</header>'
            "<description><para>Palette.</para></description>"
            + color
            + "</sectiondef>"
            "<briefdescription><para>A box.</para></briefdescription>"
            + RICH_DESCRIPTION
            + '<location file="box.h" line="3"/>'
            '<listofallmembers><member refid="classbox_1a1" prot="public" '
            'virt="non-virtual"><scope>Box</scope><name>get</name></member>'
            "</listofallmembers>",
        ),
        compound(
            "dir_src",
            "dir",
            "src",
            '<innerfile refid="box_8h">box.h</innerfile>',
        ),
        compound(
            "box_8h",
            "file",
            "box.h",
            '<includes local="no">vector</includes>'
            '<innerclass refid="classbox" prot="public">Box</innerclass>'
            + sectiondef("define", define)
            + "<briefdescription><para>Header.</para></briefdescription>"
            '<programlisting><codeline lineno="1"><highlight class="preprocessor">'
            "#define<sp/>BOX_MAX(x)<sp/>(x)</highlight></codeline></programlisting>"
            '<location file="src/box.h"/>',
        ),
        compound(
            "guide",
            "page",
            "guide",
            "<title>Guide</title><tableofcontents><tocsect><name>Intro</name>"
            "<reference>guide_1intro</reference></tocsect></tableofcontents>"
            '<detaileddescription><sect1 id="guide_1intro"><title>Intro</title>'
            "<para>Hello.</para></sect1></detaileddescription>",
        ),
    ]
