from d42 import schema

PortMappingSchema = schema.str.regex(r'(\d+:)?\d+(/\w+)?')
